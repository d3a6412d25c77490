import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import yaml
from loguru import logger

from .constants import MANIFEST_EXTENSIONS, STDIN_PATH
from .domain import ResourceObject, SourceLocation
from .exceptions import ManifestParseError


@dataclass(frozen=True)
class NamedSource:
    """A readable source of manifests along with a name used for provenance."""

    name: str
    data: bytes


def load_documents(name: str, text: str) -> Iterator[tuple[int, object]]:
    """Decode the documents of a multi-document YAML stream.

    PyYAML determines the document boundaries, so a `---` within a block scalar is no separator
    and separators may be followed by a comment.

    :param name: the name of the source, used in error messages
    :param text: the YAML stream
    :return: the documents as tuples of the line number their content starts at and their data
    :raises ManifestParseError: if the stream is no valid YAML
    """
    loader = yaml.SafeLoader(text)
    try:
        while loader.check_node():
            node = loader.get_node()
            yield node.start_mark.line + 1, loader.construct_document(node)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        raise ManifestParseError(name, mark.line + 1 if mark is not None else None, str(exc)) from exc
    finally:
        loader.dispose()


def _to_objects(doc, location: SourceLocation) -> list[ResourceObject]:
    if not isinstance(doc, dict):
        raise ManifestParseError(location.file_name, location.line, "document is not a mapping")

    # a List bundles multiple objects in a single document
    if doc.get("kind") == "List" and isinstance(doc.get("items"), list):
        objects = []
        for item in doc["items"]:
            objects.extend(_to_objects(item, location))
        return objects

    return [ResourceObject.from_manifest(doc, location)]


def parse_source(source: NamedSource) -> list[ResourceObject]:
    """Decode all resource objects of a source. Empty documents are skipped.

    :param source: the source to parse
    :return: the objects in the order they appear in the source
    :raises ManifestParseError: if a document is no valid YAML or no mapping
    """
    try:
        text = source.data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ManifestParseError(source.name, None, f"not UTF-8 encoded: {exc}") from exc

    objects = []
    for start_line, doc in load_documents(source.name, text):
        if doc is None:
            continue
        objects.extend(_to_objects(doc, SourceLocation(source.name, start_line)))

    logger.debug(f"Parsed {len(objects)} object(s) from '{source.name}'")
    return objects


def parse_sources(sources: Iterable[NamedSource]) -> list[ResourceObject]:
    objects = []
    for source in sources:
        objects.extend(parse_source(source))
    return objects


def read_sources(paths: Iterable[str | Path]) -> list[NamedSource]:
    """Read the given files. Directories are searched recursively for YAML files, "-" reads stdin.

    :param paths: the files or directories to read
    :return: the read sources, directory contents in sorted order
    """
    sources = []
    for path in paths:
        if str(path) == STDIN_PATH:
            sources.append(NamedSource(STDIN_PATH, sys.stdin.buffer.read()))
            continue

        path = Path(path)
        if path.is_dir():
            files = sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in MANIFEST_EXTENSIONS)
            if len(files) == 0:
                logger.warning(f"No manifests found in '{path}'")
        else:
            files = [path]

        for file in files:
            sources.append(NamedSource(str(file), file.read_bytes()))
    return sources
