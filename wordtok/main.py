"""wordtok/main.py
──────────────────────────────────────────────────────────────────
FastAPI entrypoint wrapping one word-punctuation tokenizer per app:

  • `/train`   – rebuild the vocabulary from a corpus.
  • `/encode`  – text → token ids (unknown units become <unk>).
  • `/decode`  – token ids (JSON list or "4, 5, 6" string) → text.
  • `/vocab`   – the vocabulary table, ordered by id.
  • `/health`  – liveness plus whether the tokenizer is trained.

Tokenizer state lives on `app.state`, so every `create_app()` call gets its
own independent vocabulary.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field, StrictInt

from .tokenizer import Tokenizer, UntrainedStateError
from .train import load_corpus, parse_ids

log = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────
# Environment
# ────────────────────────────────────────────────────────────────
CORPUS_PATH = os.getenv("WORDTOK_CORPUS")  # optional: train at startup
HOST = os.getenv("WORDTOK_HOST", "127.0.0.1")
PORT = int(os.getenv("WORDTOK_PORT", "8000"))

NOT_TRAINED = "Please train the tokenizer first."


# ────────────────────────────────────────────────────────────────
# Schemas
# ────────────────────────────────────────────────────────────────
class TrainReq(BaseModel):
    corpus: str = Field(..., description="Training text.")

class TrainResp(BaseModel):
    message: str
    vocab_size: int

class EncodeReq(BaseModel):
    text: str

class EncodeResp(BaseModel):
    ids: List[int]
    ids_text: str

class DecodeReq(BaseModel):
    ids: Union[List[StrictInt], str] = Field(
        ..., description='Token ids as a JSON list or a "4, 5, 6" string.'
    )

class DecodeResp(BaseModel):
    text: str

class VocabEntry(BaseModel):
    token: str
    id: int

class VocabResp(BaseModel):
    vocab_size: int
    tokens: List[VocabEntry]


# ────────────────────────────────────────────────────────────────
# App factory
# ────────────────────────────────────────────────────────────────
def get_tokenizer(request: Request) -> Tokenizer:
    return request.app.state.tokenizer


def create_app(corpus_path: Optional[str] = CORPUS_PATH) -> FastAPI:
    app = FastAPI(title="wordtok", version="0.1.0")
    app.state.tokenizer = Tokenizer()

    if corpus_path:
        app.state.tokenizer.train(load_corpus(corpus_path))
        log.info("trained on %s: %d tokens", corpus_path, app.state.tokenizer.get_vocab_size())

    @app.get("/health")
    def health(tok: Tokenizer = Depends(get_tokenizer)):
        return {"status": "ok", "trained": tok.is_trained}

    @app.post("/train", response_model=TrainResp)
    def train(req: TrainReq, tok: Tokenizer = Depends(get_tokenizer)):
        corpus = req.corpus.strip()
        if not corpus:
            raise HTTPException(status_code=400, detail="Please enter text to train the tokenizer.")
        try:
            tok.train(corpus)
        except Exception as exc:
            log.exception("training failed")
            raise HTTPException(status_code=500, detail=f"Error training tokenizer: {exc}")
        size = tok.get_vocab_size()
        log.info("vocabulary rebuilt: %d tokens", size)
        return TrainResp(
            message=f"Tokenizer successfully trained! Vocabulary size: {size}",
            vocab_size=size,
        )

    @app.post("/encode", response_model=EncodeResp)
    def encode(req: EncodeReq, tok: Tokenizer = Depends(get_tokenizer)):
        text = req.text.strip()
        if not text:
            raise HTTPException(status_code=400, detail="Please enter text to encode.")
        try:
            ids = tok.encode(text)
        except UntrainedStateError:
            raise HTTPException(status_code=409, detail=NOT_TRAINED)
        return EncodeResp(ids=ids, ids_text=", ".join(map(str, ids)))

    @app.post("/decode", response_model=DecodeResp)
    def decode(req: DecodeReq, tok: Tokenizer = Depends(get_tokenizer)):
        if isinstance(req.ids, str):
            try:
                ids = parse_ids(req.ids)
            except ValueError as exc:
                raise HTTPException(status_code=422, detail=str(exc))
        else:
            ids = req.ids
        if not ids:
            raise HTTPException(status_code=400, detail="Please enter token IDs to decode.")
        try:
            return DecodeResp(text=tok.decode(ids))
        except UntrainedStateError:
            raise HTTPException(status_code=409, detail=NOT_TRAINED)

    @app.get("/vocab", response_model=VocabResp)
    def vocab(
        limit: Optional[int] = Query(None, ge=1),
        tok: Tokenizer = Depends(get_tokenizer),
    ):
        if not tok.is_trained:
            raise HTTPException(status_code=409, detail="Train the tokenizer to see the vocabulary here.")
        rows = tok.vocab_table()
        if limit is not None:
            rows = rows[:limit]
        return VocabResp(
            vocab_size=tok.get_vocab_size(),
            tokens=[VocabEntry(token=t, id=i) for t, i in rows],
        )

    return app


app = create_app()

# ── CLI shim ───────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
