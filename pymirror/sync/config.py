"""Loading sync pairs from configuration files.

Two formats are supported:

XML, the ``Configs.xml`` layout::

    <Configs>
      <MasterRepository path="/data/master" />
      <BackupRepository path="/mnt/backup" />
      <Method method="2" />
    </Configs>

JSON, a single pair object or a list of them::

    [
      {"source": "/data/master", "destination": "/mnt/backup", "method": "mirror"}
    ]
"""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Union

from ..exceptions import PyMirrorError
from .modes import SyncMethod
from .pair import SyncPair

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAME = "Configs.xml"


class SyncConfigError(PyMirrorError):
    """A configuration file is missing or invalid."""


def load_sync_pairs(path: Union[str, Path]) -> list[SyncPair]:
    """Load sync pairs from an XML or JSON configuration file.

    Args:
        path: Configuration file path (.xml or .json)

    Returns:
        List of SyncPair objects

    Raises:
        SyncConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise SyncConfigError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_sync_pairs_from_json(path)
    elif suffix == ".xml":
        return [load_sync_pair_from_xml(path)]
    raise SyncConfigError(
        f"Unsupported configuration format '{path.suffix}' (expected .xml or .json)"
    )


def load_sync_pair_from_xml(path: Path) -> SyncPair:
    """Load a sync pair from a ``Configs.xml`` style file.

    Elements are matched by tag name anywhere in the document. A missing
    ``Method`` element selects the single method.

    Raises:
        SyncConfigError: If the file cannot be parsed, a repository path is
            missing, or the method code is unknown
    """
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        raise SyncConfigError(f"Cannot read XML configuration {path}: {e}") from e

    source = _xml_attribute(root, "MasterRepository", "path")
    destination = _xml_attribute(root, "BackupRepository", "path")
    method_code = _xml_attribute(root, "Method", "method")

    missing = [
        name
        for name, value in (
            ("MasterRepository", source),
            ("BackupRepository", destination),
        )
        if not value
    ]
    if missing:
        raise SyncConfigError(
            f"Missing repository path in {path}: {', '.join(missing)}"
        )

    method = SyncMethod.SINGLE
    if method_code is not None:
        try:
            method = SyncMethod.from_code(method_code)
        except ValueError as e:
            raise SyncConfigError(str(e)) from e

    logger.debug(f"Loaded XML configuration from {path}: method={method.value}")
    return SyncPair(source=Path(source), destination=Path(destination), method=method)


def _xml_attribute(root: ET.Element, tag: str, attribute: str) -> Any:
    element = root if root.tag == tag else root.find(f".//{tag}")
    if element is None:
        return None
    return element.get(attribute)


def load_sync_pairs_from_json(path: Path) -> list[SyncPair]:
    """Load sync pairs from a JSON file.

    Raises:
        SyncConfigError: If the JSON is malformed or a pair is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise SyncConfigError(f"Cannot read JSON configuration {path}: {e}") from e

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise SyncConfigError(
            f"Expected a sync pair object or a list of them in {path}"
        )

    pairs: list[SyncPair] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise SyncConfigError(f"Sync pair {i} in {path} is not an object")
        try:
            pairs.append(SyncPair.from_dict(item))
        except ValueError as e:
            raise SyncConfigError(f"Invalid sync pair {i} in {path}: {e}") from e

    logger.debug(f"Loaded {len(pairs)} sync pair(s) from {path}")
    return pairs
