"""
localesync - command line entry point.

Seeds an in-memory content repository from a YAML file, publishes every
canonical-locale node and prints the resulting locale variants. Useful to
check a dimension / node type configuration before wiring the service
into a real repository.

    localesync sync config/content/example.yaml --no-translate
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import yaml

from localesync.config import get_settings
from localesync.config_loader import load_config
from localesync.content.memory import (
    InMemoryContentRepository,
    MemoryContextFactory,
    MemoryPublishingService,
)
from localesync.core.events import EventBus
from localesync.core.models import ConfigurationError
from localesync.core.registry import Registry
from localesync.i18n.translator import DSPyTranslationService
from localesync.services.node_translation import NodeTranslationService


def run_sync(
    content_file: Path | str,
    config_dir: Path | str | None = None,
    translate: bool = True,
) -> dict[str, dict[str, Any]]:
    """
    Publish every node of `content_file` and collect the variants.

    Returns:
        identifier -> preset -> {path, removed, properties}
    """
    settings = get_settings()
    registry = Registry()
    load_config(config_dir, registry)

    dimension = registry.get_dimension(settings.language_dimension_name)
    event_bus = EventBus()
    repository = InMemoryContentRepository(registry, dimension.name, event_bus)
    publishing_service = MemoryPublishingService(
        repository, event_bus, settings.live_workspace_name
    )

    service = NodeTranslationService(
        translation_service=DSPyTranslationService(),
        publishing_service=publishing_service,
        node_data_repository=repository,
        context_factory=MemoryContextFactory(repository),
        content_dimensions=registry.dimensions,
        settings=settings,
    )
    service.register(event_bus)

    with open(content_file) as f:
        entries = yaml.safe_load(f) or []
    if not isinstance(entries, list):
        raise ConfigurationError(f"{content_file} must contain a list of nodes")

    for entry in entries:
        repository.add_node(
            identifier=entry["identifier"],
            path=entry["path"],
            node_type=entry["type"],
            dimension_value=dimension.default_preset,
            properties=entry.get("properties"),
            workspace_name=settings.live_workspace_name,
            hidden=entry.get("hidden", False),
            index=entry.get("index"),
        )

    source_context = repository.context(dimension.default_preset)
    for entry in entries:
        node = source_context.get_node_by_identifier(entry["identifier"])
        if translate:
            publishing_service.publish_node(node)
        else:
            service.sync_node(node, settings.live_workspace_name, translate=False)

    return {
        entry["identifier"]: {
            preset: {
                "path": record.path,
                "removed": record.removed,
                "properties": record.properties,
            }
            for preset, record in repository.get_variants(
                entry["identifier"], settings.live_workspace_name
            ).items()
        }
        for entry in entries
    }


def main(argv: list[str] | None = None) -> None:
    """Run localesync from the command line."""
    parser = argparse.ArgumentParser(
        prog="localesync",
        description="Synchronize and translate locale variants of content nodes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Publish the nodes of a YAML content file and print their variants",
    )
    sync_parser.add_argument("content_file", help="YAML list of nodes to publish")
    sync_parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory with dimensions.yaml and node_types/ (default: bundled config)",
    )
    sync_parser.add_argument(
        "--no-translate",
        action="store_true",
        help="Synchronize structure and untranslated properties only",
    )
    sync_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    variants = run_sync(
        args.content_file,
        config_dir=args.config_dir,
        translate=not args.no_translate,
    )
    print(yaml.safe_dump(variants, sort_keys=False, allow_unicode=True))


if __name__ == "__main__":
    main()
