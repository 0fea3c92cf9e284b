# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from .speller import edit_distance, insert_and_shift, merge_shortlists, suggest, Suggestion, TopNSelector

__all__ = [
    "edit_distance",
    "insert_and_shift",
    "merge_shortlists",
    "suggest",
    "Suggestion",
    "TopNSelector",
]
