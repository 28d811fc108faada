from .tokenizer import SPECIAL_TOKENS, Tokenizer, UntrainedStateError, split_units

__all__ = ["SPECIAL_TOKENS", "Tokenizer", "UntrainedStateError", "split_units"]
