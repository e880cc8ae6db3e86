"""
Practice Syllable Enumeration.

The deck is every combination of 14 leading consonants with 10 vowels,
composed into precomposed Hangul syllables without a final consonant:

    code_point = HANGUL_BASE + (lead_index * 21 + vowel_index) * 28

The traversal order (leading consonant outer, vowel inner) defines each
syllable's ``order`` and ``id`` and therefore its audio file name. The web
UI must load the same order; export_deck() writes it as JSON so the UI does
not keep a second copy of the tables.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

from hangul_tts.tts.storage import audio_file_name, public_path

# Indexes into the 19 leading consonants (ㄱ ㄴ ㄷ ㄹ ㅁ ㅂ ㅅ ㅇ ㅈ ㅊ ㅋ ㅌ ㅍ ㅎ)
LEAD_INDEXES = (0, 2, 3, 5, 6, 7, 9, 11, 12, 14, 15, 16, 17, 18)
# Indexes into the 21 vowels (ㅏ ㅑ ㅓ ㅕ ㅗ ㅛ ㅜ ㅠ ㅡ ㅣ)
TRAIL_INDEXES = (0, 2, 4, 6, 8, 12, 13, 17, 18, 20)
HANGUL_BASE = 0xAC00

VOWEL_COUNT = 21
FINAL_COUNT = 28

SYLLABLE_COUNT = len(LEAD_INDEXES) * len(TRAIL_INDEXES)


@dataclass(frozen=True)
class Syllable:
    """One practice syllable; ``order`` is 1-based."""
    id: str
    character: str
    order: int


def pad_order(order: int) -> str:
    return f"{order:03d}"


def syllable_id(order: int) -> str:
    return f"letter-{pad_order(order)}"


def compose(lead_index: int, vowel_index: int) -> str:
    """Compose a final-less syllable from jamo indexes."""
    return chr(HANGUL_BASE + (lead_index * VOWEL_COUNT + vowel_index) * FINAL_COUNT)


def enumerate_syllables() -> List[Syllable]:
    """
    Build the practice deck in its canonical order.

    Returns:
        SYLLABLE_COUNT syllables with contiguous orders 1..N.
    """
    syllables: List[Syllable] = []
    for lead in LEAD_INDEXES:
        for vowel in TRAIL_INDEXES:
            order = len(syllables) + 1
            syllables.append(Syllable(id=syllable_id(order), character=compose(lead, vowel), order=order))
    return syllables


def deck_entries(output_format: str, public_base_path: str) -> List[Dict[str, Union[str, int]]]:
    """Deck rows in the shape the web UI uses (camelCase keys)."""
    entries: List[Dict[str, Union[str, int]]] = []
    for syllable in enumerate_syllables():
        file_name = audio_file_name(syllable.order, output_format)
        entries.append({
            "id": syllable.id,
            "character": syllable.character,
            "order": syllable.order,
            "audioFileName": file_name,
            "audioPath": public_path(public_base_path, file_name),
        })
    return entries


def export_deck(path: Union[str, Path], output_format: str, public_base_path: str) -> Path:
    """
    Write the deck as a JSON array for the web UI.

    Returns:
        Path of the written file.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = deck_entries(output_format, public_base_path)
    out.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return out
