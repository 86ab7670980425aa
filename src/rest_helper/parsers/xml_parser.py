"""
XML encoding and decoding.

Python has no struct tags to drive XML marshalling, so values are mapped with
a small convention:

- a mapping becomes child elements, one per key
- a key starting with ``@`` becomes an attribute
- the key ``#text`` becomes the element text
- a list repeats the element once per item
- ``None`` becomes an empty element

Decoding produces the same shape, so ``{"item": {"@id": "1", "name": "x"}}``
survives a trip through ``<item id="1"><name>x</name></item>``.
"""
import dataclasses
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

from ..errors import SerializationError
from .base import Parser

CONTENT_TYPE_XML = "application/xml"

_NAME_RE = re.compile(r"^[A-Za-z_][\w.\-]*(:[A-Za-z_][\w.\-]*)?$")


def _to_data(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise SerializationError("XML", f"invalid element or attribute name {name!r}")
    return name


def _fill(element: ET.Element, value: Any) -> None:
    value = _to_data(value)
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            if isinstance(key, str) and key.startswith("@"):
                element.set(_check_name(key[1:]), _text(child))
            elif key == "#text":
                element.text = _text(child)
            else:
                _append(element, _check_name(key), child)
        return
    if isinstance(value, (list, tuple)):
        raise SerializationError("XML", f"list under <{element.tag}> needs an element name")
    element.text = _text(value)


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    if isinstance(value, (list, tuple)):
        for item in value:
            _fill(ET.SubElement(parent, tag), item)
    else:
        _fill(ET.SubElement(parent, tag), value)


def encode_xml(value: Any, root: Optional[str] = None) -> bytes:
    """Serialize ``value`` as UTF-8 XML without a declaration.

    Args:
        value: An ``ElementTree.Element``, or data (mapping, pydantic model,
            dataclass) following the module mapping convention.
        root: Root element name. Without it ``value`` must be a mapping with
            exactly one key, which names the root.

    Raises:
        SerializationError: ``value`` has no XML form.
    """
    if isinstance(value, ET.Element):
        element = value
    else:
        data = _to_data(value)
        if root is None:
            if not isinstance(data, Mapping) or len(data) != 1:
                raise SerializationError(
                    "XML", "value needs exactly one root key, or pass root="
                )
            root, data = next(iter(data.items()))
        element = ET.Element(_check_name(root))
        _fill(element, data)

    try:
        return ET.tostring(element, encoding="utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError("XML", str(e)) from e


def element_to_data(element: ET.Element) -> Any:
    """Convert an element's content to plain data (text, dict or None)."""
    children = list(element)
    if not children and not element.attrib:
        return element.text

    result: Dict[str, Any] = {f"@{k}": v for k, v in element.attrib.items()}
    repeated = set()
    for child in children:
        value = element_to_data(child)
        if child.tag not in result:
            result[child.tag] = value
        elif child.tag in repeated:
            result[child.tag].append(value)
        else:
            result[child.tag] = [result[child.tag], value]
            repeated.add(child.tag)

    text = (element.text or "").strip()
    if text:
        result["#text"] = text
    return result


class XMLParser(Parser):
    """Built-in parser for ``application/xml``.

    ``parse`` returns ``{root_tag: content}``; ``validate`` applies the model
    to the root content.
    """

    media_type = CONTENT_TYPE_XML

    def parse(self, data: bytes) -> Any:
        """Parse ``data`` with ``xml.etree.ElementTree``.

        Response bodies are untrusted input. External entities are never
        resolved (they fail with ``ParseError``), but internal entity
        expansion ("billion laughs") is only bounded by the amplification
        limits of the bundled expat (2.4.1 and later). Register a hardened
        parser with ``with_parser`` when talking to servers that are not
        trusted.
        """
        root = ET.fromstring(data)
        return {root.tag: element_to_data(root)}

    def validate(self, value: Any, model: Any) -> Any:
        if isinstance(value, Mapping) and len(value) == 1:
            value = next(iter(value.values()))
        return super().validate(value, model)
