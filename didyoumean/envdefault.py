# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Configurable parameters via environment variables
"""

import os

USER_HOME = os.path.expanduser("~")

XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME") or os.path.join(USER_HOME, ".config")
XDG_DATA_HOME = os.environ.get("XDG_DATA_HOME") or os.path.join(USER_HOME, ".local", "share")

DYM_CONFIG_DIR = os.environ.get("DYM_CONFIG_DIR", os.path.join(XDG_CONFIG_HOME, "didyoumean"))

DYM_CLIENT_CONFIG = os.environ.get("DYM_CLIENT_CONFIG", os.path.join(DYM_CONFIG_DIR, "didyoumean.json"))
DYM_DATA_DIR = os.environ.get("DYM_DATA_DIR", os.path.join(XDG_DATA_HOME, "didyoumean"))
DYM_LANG = os.environ.get("DYM_LANG")
DYM_WORDLIST_URL = os.environ.get("DYM_WORDLIST_URL", "https://raw.githubusercontent.com/hisbaan/wordlists/main")
