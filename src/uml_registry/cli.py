#!/usr/bin/env python3
"""Command line entry point: load XMI documents and print the resulting registry.

Usage:
    uml-registry model.xmi [more.xmi ...] --registry-id shop --config registry.yaml
    uml-registry orders.xmi --import core.xmi --format yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from .core.config import RegistryConfig
from .core.dependencies import get_resource_resolver
from .core.exceptions import PropertyConversionError, XMIParseError
from .core.logging import setup_logging
from .services.domain.xmi import UMLRegistry, parse_document

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="uml-registry", description=__doc__.splitlines()[0])
    ap.add_argument("documents", nargs="+", help="XMI documents to load together")
    ap.add_argument("--registry-id", help="Prefix for generated type ids")
    ap.add_argument("--config", help="YAML file with registry options")
    ap.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        help="XMI document loaded into its own registry and consulted for unresolved types (repeatable)",
    )
    ap.add_argument("--s3", action="store_true", help="Also resolve s3:// references through MinIO (MINIO_* settings)")
    ap.add_argument("--format", choices=("json", "yaml"), default="json")
    ap.add_argument("--log-level", default="WARNING")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the snapshot
    setup_logging(args.log_level.upper(), stream="ext://sys.stderr")

    config = RegistryConfig.from_yaml(args.config) if args.config else RegistryConfig()
    config = RegistryConfig.from_env(config)

    resolver = get_resource_resolver(with_s3=args.s3)
    try:
        imports = []
        for path in args.imports:
            imported = UMLRegistry(Path(path).stem, config=config, imports=list(imports), resource_resolver=resolver)
            imported.load_file(path)
            imports.append(imported)

        registry = UMLRegistry(args.registry_id, config=config, imports=imports, resource_resolver=resolver)
        documents = [parse_document(Path(path).read_bytes(), Path(path).resolve().as_uri()) for path in args.documents]
        registry.load(*documents)
    except (OSError, XMIParseError, PropertyConversionError) as e:
        logger.error(f"Failed to load model: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    snapshot = registry.snapshot().model_dump(mode="json", exclude_none=True)
    if args.format == "yaml":
        print(yaml.safe_dump(snapshot, sort_keys=False, allow_unicode=True), end="")
    else:
        print(json.dumps(snapshot, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
