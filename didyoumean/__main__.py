# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from .cli import DidYouMeanCLI


def main() -> None:
    DidYouMeanCLI().main()


if __name__ == "__main__":
    main()
