#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_digits.py
----------------------------------------------------------------------
Digit extraction: raw phone-number text -> two-character groups.

    "06 01 02 03 04"  ->  ["06", "01", "02", "03", "04"]
    "0601020304"      ->  ["06", "01", "02", "03", "04"]
    "12345"           ->  ["12", "34"]          (odd leftover dropped)

Only whitespace is removed. Anything else is grouped as-is and left for
the note mapper to reject.
"""

from __future__ import annotations

from typing import List


def strip_whitespace(raw: str) -> str:
    return "".join(raw.split())


def extract_digit_pairs(raw: str) -> List[str]:
    """Return the left-to-right two-character groups of ``raw``."""
    compact = strip_whitespace(raw or "")
    usable = len(compact) - (len(compact) % 2)
    return [compact[i:i + 2] for i in range(0, usable, 2)]


__all__ = ["extract_digit_pairs", "strip_whitespace"]
