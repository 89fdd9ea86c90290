import logging
import sys

from .batch import decode_manifests


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        decode_manifests()
    except OSError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
