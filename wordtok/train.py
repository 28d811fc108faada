"""
Corpus loading + command-line training run for the wordtok tokenizer
Run with:
    python -m wordtok.train --corpus data/corpus.txt --encode "Hello, world!"
"""
from __future__ import annotations
import argparse, json
from pathlib import Path

import pandas as pd

from .tokenizer import Tokenizer

# ───────────────────────────────────────────────────────────────
DEFAULTS: dict[str, object] = dict(
    corpus      = "data/corpus.txt",
    text_column = "text",      # parquet / jsonl column holding documents
    show_vocab  = 20,          # rows of the vocab table to print, 0 = all
    encode      = "",
    decode      = "",          # "4, 5, 6"
)

# ───────────────────────── helpers ─────────────────────────────
def load_corpus(path: str | Path, text_column: str = "text") -> str:
    """Read a training corpus; tabular files are joined one doc per line."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Missing {path}")

    suffix = path.suffix.lower()
    if suffix == ".parquet":
        df = pd.read_parquet(path)
    elif suffix == ".jsonl":
        df = pd.read_json(path, lines=True)
    else:
        return path.read_text(encoding="utf8")

    if text_column not in df.columns:
        raise KeyError(f"{path} has no column {text_column!r}")
    texts = df[text_column].dropna().astype(str).tolist()
    return "\n".join(texts)


def parse_ids(raw: str) -> list[int]:
    """Parse a comma-separated id string such as ``"4, 5,6"``."""
    ids = []
    for piece in raw.split(","):
        piece = piece.strip()
        if not piece:
            continue
        try:
            ids.append(int(piece))
        except ValueError:
            raise ValueError(f"Invalid token id: {piece!r}") from None
    return ids


def _print_vocab(tokenizer: Tokenizer, limit: int) -> None:
    rows = tokenizer.vocab_table()
    if limit:
        rows = rows[:limit]
    width = max((len(t) for t, _ in rows), default=5)
    print(f"{'token':<{width}}  id")
    for tok, idx in rows:
        print(f"{tok:<{width}}  {idx}")

# ───────────────────────── train() ─────────────────────────────
def train(**cfg_args) -> Tokenizer:
    hp = {**DEFAULTS, **cfg_args}

    corpus = load_corpus(hp["corpus"], hp["text_column"])
    tokenizer = Tokenizer()
    tokenizer.train(corpus)
    print(f"Tokenizer successfully trained! Vocabulary size: {tokenizer.get_vocab_size()}")
    _print_vocab(tokenizer, int(hp["show_vocab"]))

    if hp["encode"]:
        ids = tokenizer.encode(hp["encode"])
        print("Encoded IDs:", ", ".join(map(str, ids)))
    if hp["decode"]:
        print("Decoded Text:", tokenizer.decode(parse_ids(hp["decode"])))
    return tokenizer

# ── CLI shim ───────────────────────────────────────────────────
def main(argv: list[str] | None = None) -> None:
    arg = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    for k,v in DEFAULTS.items(): arg.add_argument(f"--{k.replace('_','-')}", type=type(v), default=v)
    arg.add_argument("--cfg-json", type=str, help="Path to JSON overrides")
    ns = vars(arg.parse_args(argv))
    cfg_json = ns.pop("cfg_json")
    if cfg_json: ns.update(json.loads(Path(cfg_json).read_text()))
    train(**ns)


if __name__ == "__main__":
    main()
