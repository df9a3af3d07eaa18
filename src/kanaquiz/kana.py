import logging
import os
from typing import Dict, List

import pandas as pd

from .config import settings
from .exceptions import ConfigurationError, UnknownModeError
from .models import ModeInfo, Pair

logger = logging.getLogger("kanaquiz.kana")

# Hiragana block U+3041..U+3096 sits 0x60 below katakana U+30A1..U+30F6.
KATAKANA_OFFSET = 0x60

HIRAGANA_FILE = "hiragana.csv"


def load_pairs(file_path: str) -> List[Pair]:
    """Reads a symbol/translation table and checks it is usable."""
    df = pd.read_csv(file_path, encoding="utf-8", dtype=str, keep_default_na=False)
    if "symbol" not in df.columns or "translation" not in df.columns:
        raise ConfigurationError(f"{file_path}: missing symbol/translation columns.")

    df["symbol"] = df["symbol"].str.strip()
    df["translation"] = df["translation"].str.strip()
    if (df["symbol"] == "").any() or (df["translation"] == "").any():
        raise ConfigurationError(f"{file_path}: blank symbol or translation.")
    dupes = df.loc[df["symbol"].duplicated(), "symbol"].tolist()
    if dupes:
        raise ConfigurationError(f"{file_path}: duplicate symbols {dupes}.")

    return [Pair(**row) for row in df[["symbol", "translation"]].to_dict("records")]


def to_katakana(symbol: str) -> str:
    return "".join(chr(ord(ch) + KATAKANA_OFFSET) for ch in symbol)


def derive_katakana(pairs: List[Pair]) -> List[Pair]:
    return [Pair(symbol=to_katakana(p.symbol), translation=p.translation) for p in pairs]


# --- Service Layer: Character Set Management ---
class CharacterSetManager:
    """Holds the hiragana table and the katakana table derived from it."""

    MODES = ("hiragana", "katakana")

    def __init__(self, directory: str, batch_size: int = settings.BATCH_SIZE):
        self.directory = directory
        self.batch_size = batch_size
        self.char_sets: Dict[str, List[Pair]] = {}

    def load_all(self):
        hiragana = load_pairs(os.path.join(self.directory, HIRAGANA_FILE))
        self.char_sets = {
            "hiragana": hiragana,
            "katakana": derive_katakana(hiragana),
        }
        for mode, pairs in self.char_sets.items():
            logger.info(f"Loaded {len(pairs)} {mode} pairs")

    def get_pairs(self, mode: str) -> List[Pair]:
        if not self.char_sets:
            self.load_all()
        if mode not in self.char_sets:
            raise UnknownModeError(mode)
        return self.char_sets[mode]

    def title(self, mode: str) -> str:
        if mode not in self.MODES:
            raise UnknownModeError(mode)
        return f"{mode.title()} → Bangla MCQ ({self.batch_size} Random)"

    def other_mode(self, mode: str) -> str:
        if mode not in self.MODES:
            raise UnknownModeError(mode)
        return self.MODES[1] if mode == self.MODES[0] else self.MODES[0]

    def get_modes(self) -> List[ModeInfo]:
        return [
            ModeInfo(id=mode, title=self.title(mode), count=len(self.get_pairs(mode)))
            for mode in self.MODES
        ]
