import re
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping

# word runs, or any single non-space symbol
UNIT_RE = re.compile(r"\w+|[^\w\s]")
WORD_START_RE = re.compile(r"\w")
WHITESPACE_RE = re.compile(r"\s+")

UNK_TOKEN = "<unk>"
PAD_TOKEN = "<pad>"
CLS_TOKEN = "<cls>"
SEP_TOKEN = "<sep>"

SPECIAL_TOKENS: Mapping[str, int] = MappingProxyType({
    UNK_TOKEN: 0,
    PAD_TOKEN: 1,
    CLS_TOKEN: 2,
    SEP_TOKEN: 3,
})
UNK_ID = SPECIAL_TOKENS[UNK_TOKEN]

UNTRAINED_MSG = "Tokenizer has not been trained yet. Please call train() first."


class UntrainedStateError(RuntimeError):
    """Raised when encode/decode run before any call to train()."""


def split_units(text: str) -> list[str]:
    """Lowercase *text* and cut it into word runs and single symbols."""
    return UNIT_RE.findall(text.lower())


class Tokenizer:
    """
    A frequency-ranked word-punctuation tokenizer:
     - Split on word characters or single punctuation.
     - Builds a vocab from your corpus, most frequent units first.
     - Reserves 0 for <unk>, 1 for <pad>, 2 for <cls>, 3 for <sep>.

    Equal counts keep the order in which the units first appear in the
    corpus, so training is reproducible for a given text.
    """

    def __init__(self):
        self.special_tokens = SPECIAL_TOKENS
        self.token2id: dict[str, int] = {}
        self.id2token: dict[int, str] = {}
        self.next_id = len(self.special_tokens)

    # training ------------------------------------------------------------
    def train(self, corpus: str) -> None:
        token2id = dict(self.special_tokens)
        id2token = {i: t for t, i in token2id.items()}
        next_id = len(token2id)

        counts = Counter(split_units(corpus))
        # sorted() is stable: ties stay in first-encounter order
        for tok in sorted(counts, key=counts.__getitem__, reverse=True):
            if tok in token2id:
                continue
            token2id[tok] = next_id
            id2token[next_id] = tok
            next_id += 1

        # swap in only once the new vocab is complete
        self.token2id, self.id2token, self.next_id = token2id, id2token, next_id

    # encode / decode -----------------------------------------------------
    def encode(self, text: str) -> list[int]:
        self._check_trained()
        return [self.token2id.get(t, UNK_ID) for t in split_units(text)]

    def decode(self, ids: Iterable[int]) -> str:
        self._check_trained()
        toks = [self._render(i) for i in ids]

        out = []
        for idx, tok in enumerate(toks):
            if idx and WORD_START_RE.match(tok) and WORD_START_RE.match(toks[idx - 1]):
                out.append(" ")
            out.append(tok)
        return WHITESPACE_RE.sub(" ", "".join(out)).strip()

    def _render(self, token_id) -> str:
        if isinstance(token_id, bool) or not isinstance(token_id, int):
            raise ValueError(f"token ids must be integers, got {token_id!r}")
        tok = self.id2token.get(token_id)
        return tok if tok is not None else f"[UNKNOWN ID:{token_id}]"

    def _check_trained(self) -> None:
        if not self.token2id:
            raise UntrainedStateError(UNTRAINED_MSG)

    # vocabulary inspection -----------------------------------------------
    @property
    def is_trained(self) -> bool:
        return bool(self.token2id)

    @property
    def vocab(self) -> Mapping[str, int]:
        """Read-only view of the current token -> id mapping."""
        return MappingProxyType(self.token2id)

    def token_to_id(self, token: str) -> int:
        return self.token2id.get(token, UNK_ID)

    def id_to_token(self, token_id: int) -> str | None:
        return self.id2token.get(token_id)

    def get_vocab_size(self) -> int:
        return len(self.token2id)

    def vocab_table(self) -> list[tuple[str, int]]:
        """(token, id) rows ordered by id, as shown in the vocabulary view."""
        return sorted(self.token2id.items(), key=lambda kv: kv[1])
