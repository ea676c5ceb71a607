"""Convert plugin.xml documents to plain mappings and back.

Decoded shape (one mapping per element)::

    <platform name="android">            {"platform": {
      <source-file src="a.java"/>           "name": "android",
      <source-file src="b.java"/>           "source-file": [{"src": "a.java"},
    </platform>                                             {"src": "b.java"}]}}

- attributes are string keys
- a child element that occurs once is a mapping, repeated children a list
- non-blank text is stored under ``"$t"``
- prefixed names keep their prefix (``android:name``), namespace
  declarations are kept as ``xmlns:<prefix>`` attributes
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from android_lib_generator.core.errors import PluginXmlError

TEXT_KEY = "$t"

XmlNode = dict[str, Any]


def _qualified(name: str, prefixes: Mapping[str, str]) -> str:
    """Turn ElementTree's ``{uri}local`` into ``prefix:local``."""
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _add_child(node: XmlNode, key: str, value: object) -> None:
    if key not in node:
        node[key] = value
        return
    existing = node[key]
    if isinstance(existing, list):
        cast(list[object], existing).append(value)
    else:
        node[key] = [existing, value]


def _to_node(
    element: ET.Element,
    prefixes: Mapping[str, str],
    declarations: Mapping[ET.Element, list[tuple[str, str]]],
) -> XmlNode:
    node: XmlNode = {}
    for prefix, uri in declarations.get(element, []):
        node[f"xmlns:{prefix}" if prefix else "xmlns"] = uri
    for name, value in element.attrib.items():
        node[_qualified(name, prefixes)] = value
    for child in element:
        _add_child(
            node,
            _qualified(child.tag, prefixes),
            _to_node(child, prefixes, declarations),
        )
    if element.text and element.text.strip():
        node[TEXT_KEY] = element.text.strip()
    return node


def decode_xml(content: str | bytes) -> XmlNode:
    """Decode an XML document into ``{root_tag: node}``.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well-formed
    """
    data = content.encode("utf-8") if isinstance(content, str) else content

    prefixes: dict[str, str] = {}
    declarations: dict[ET.Element, list[tuple[str, str]]] = {}
    pending: list[tuple[str, str]] = []
    root: ET.Element | None = None

    for event, item in ET.iterparse(io.BytesIO(data), events=("start-ns", "start")):
        if event == "start-ns":
            prefix, uri = cast(tuple[str, str], item)
            prefixes.setdefault(uri, prefix)
            pending.append((prefix, uri))
            continue
        element = cast(ET.Element, item)
        if root is None:
            root = element
        if pending:
            declarations[element] = pending
            pending = []

    if root is None:
        raise ET.ParseError("no element found")

    return {_qualified(root.tag, prefixes): _to_node(root, prefixes, declarations)}


def load_plugin_document(path: Path) -> XmlNode | None:
    """Read and decode a plugin.xml file.

    Returns:
        Decoded tree, or None when the file is missing or empty

    Raises:
        PluginXmlError: If the file is not well-formed XML
    """
    if not path.is_file():
        return None
    data = path.read_bytes()
    if not data.strip():
        return None
    try:
        return decode_xml(data)
    except ET.ParseError as exc:
        raise PluginXmlError(f"Cannot parse {path}: {exc}") from exc


# ============================================================================
# Encoding
# ============================================================================


def _is_container(value: object) -> bool:
    return isinstance(value, Mapping | list | tuple)


def _build_elements(tag: str, value: object) -> list[ET.Element]:
    if isinstance(value, list | tuple):
        elements: list[ET.Element] = []
        for item in cast(list[object], value):
            elements.extend(_build_elements(tag, item))
        return elements

    element = ET.Element(tag)
    if isinstance(value, Mapping):
        for key, child in cast(Mapping[str, object], value).items():
            if key == TEXT_KEY:
                element.text = str(child)
            elif _is_container(child):
                element.extend(_build_elements(key, child))
            elif child is not None:
                element.set(key, str(child))
    elif value is not None:
        element.text = str(value)
    return [element]


def encode_xml(tree: Mapping[str, Any], indent: str = "    ") -> str:
    """Encode a decoded tree back to indented XML.

    Every container value becomes an element; top-level scalars have no
    element to attach to and are skipped. Several top-level keys produce
    sibling elements separated by newlines.
    """
    chunks: list[str] = []
    for key, value in tree.items():
        if key == TEXT_KEY or not _is_container(value):
            continue
        for element in _build_elements(key, value):
            ET.indent(element, space=indent)
            chunks.append(ET.tostring(element, encoding="unicode"))
    return "\n".join(chunks)
