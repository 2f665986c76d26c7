"""Command-line entry point.

Inspect a document's decoded references::

    $ python -m kanji_trainer inspect kanji.xml --config trainer.json

Serve the HTTP surface::

    $ python -m kanji_trainer serve kanji.xml --port 5000
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import TrainerConfig, configure_logging
from .errors import ConfigError, DecodeError, PathError
from .library import ReferenceLibrary

logger = logging.getLogger(__name__)


def load_config(path: Optional[str]) -> TrainerConfig:
    """Load a TrainerConfig from a JSON file, or defaults when path is None."""
    if path is None:
        return TrainerConfig()
    with open(path, encoding='utf-8') as f:
        try:
            values = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e
    if not isinstance(values, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    return TrainerConfig.from_mapping(values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='kanji_trainer',
        description='Decode kanji stroke references and score drawn strokes')
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='JSON file with trainer settings')
    parser.add_argument('--log-level', type=str, default='INFO',
                        help='DEBUG, INFO, WARNING or ERROR')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on malformed path strings instead of skipping')

    sub = parser.add_subparsers(dest='command', required=True)

    inspect = sub.add_parser('inspect', help='Print decoded references as JSON')
    inspect.add_argument('document', type=str, help='Character document (XML)')
    inspect.add_argument('--points', action='store_true',
                         help='Include resampled reference points')

    serve = sub.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('document', type=str, help='Character document (XML)')
    serve.add_argument('--host', type=str, default='127.0.0.1')
    serve.add_argument('--port', '-p', type=int, default=5000)
    return parser


def _inspect(library: ReferenceLibrary, include_points: bool) -> dict:
    characters = []
    for i, character in enumerate(library):
        data = character.to_dict()
        data['index'] = i
        if not include_points:
            for stroke in data['strokes']:
                stroke.pop('points')
        characters.append(data)
    return {'config': library.config.to_dict(), 'characters': characters}


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the selected command.

    Returns:
        Process exit status: 0 on success, 1 when the document or config
        could not be loaded.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        config = load_config(args.config)
        library = ReferenceLibrary.from_file(Path(args.document), config, strict=args.strict)
    except (DecodeError, ConfigError, PathError) as e:
        logger.error("Cannot load references: %s", e)
        return 1
    except OSError as e:
        logger.error("Cannot read %s: %s", e.filename, e.strerror)
        return 1

    if args.command == 'inspect':
        json.dump(_inspect(library, args.points), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write('\n')
        return 0

    from .api import create_app
    app = create_app(library)
    app.run(host=args.host, port=args.port)
    return 0
