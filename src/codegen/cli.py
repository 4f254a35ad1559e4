from __future__ import annotations

import argparse

from dotenv import load_dotenv

from codegen.errors import GeneratorError
from codegen.generator import generate
from utils.config import load_generator_config
from utils.logging import get_logger, setup_logging


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_logging()
    parser = argparse.ArgumentParser(
        description="Generate a constant country list from countries.json (paths come from config/generator.yaml)",
    )
    parser.parse_args(argv)

    logger = get_logger(component="cli")
    try:
        generate(load_generator_config())
    except (GeneratorError, OSError) as exc:
        logger.error("generation_failed", error=str(exc), error_type=type(exc).__name__)
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
