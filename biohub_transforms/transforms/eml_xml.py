"""EML XML decoding.

Converts an EML XML document into the JSON tree the metadata and
coverage extractors read.  The tree follows the conventions BioHub
stores in ``eml_json_source``:

- element names keep their namespace prefix as written (``eml:eml``)
- attributes become ``@_``-prefixed keys (``dataset.@_id``)
- leaf values stay strings, even when they look numeric
- repeated children decode to a list; ``relatedProject``, ``section``,
  ``taxonomicCoverage`` and ``metadataProvider`` always decode to a list
- an element with attributes or children and non-blank text keeps the
  text under ``#text``
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from biohub_transforms.core.constants import (
    EML_ARRAY_TAGS,
    EML_ATTRIBUTE_PREFIX,
    EML_TEXT_KEY,
)
from biohub_transforms.core.exceptions import ValidationError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("biohub_transforms.transforms.eml_xml")

_XML_DECLARATION = re.compile(r"\A\ufeff?\s*<\?xml\b[^>]*\?>")


class EmlDecodeError(ValidationError):
    """Raised when an EML document is not decodable XML."""

    default_stage = "eml_xml"
    default_code = "EML_DECODE_FAILED"


def decode_eml(xml: bytes | str) -> dict[str, Any]:
    """Decode an EML XML document into a JSON-compatible dict.

    Args:
        xml: Raw EML document.  Bytes are decoded per their XML
            declaration; text is parsed as is.

    Returns:
        ``{root_name: root_value}``, e.g. ``{"eml:eml": {...}}``.

    Raises:
        EmlDecodeError: If the input is empty or not well-formed XML.
    """
    from lxml import etree  # type: ignore[attr-defined]

    # Text is already decoded; its declared encoding no longer applies.
    content = _XML_DECLARATION.sub("", xml, count=1) if isinstance(xml, str) else xml
    if not content.strip():
        msg = "EML document is empty"
        raise EmlDecodeError(msg)

    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise EmlDecodeError(msg) from exc

    name = _qualified_name(root, root.tag)
    logger.debug("Decoded EML document | root=%s", name)
    return {name: _decode_element(root, parent_nsmap={})}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _decode_element(elem: _Element, parent_nsmap: dict[str | None, str]) -> Any:
    node: dict[str, Any] = {}

    for prefix, uri in elem.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            key = f"xmlns:{prefix}" if prefix else "xmlns"
            node[EML_ATTRIBUTE_PREFIX + key] = uri

    for attr_name, attr_value in elem.attrib.items():
        node[EML_ATTRIBUTE_PREFIX + _qualified_name(elem, attr_name)] = attr_value

    text_parts = [elem.text or ""]
    for child in elem:
        text_parts.append(child.tail or "")
        if not isinstance(child.tag, str):
            continue
        name = _qualified_name(child, child.tag)
        value = _decode_element(child, parent_nsmap=dict(elem.nsmap))
        if name in node:
            existing = node[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[name] = [existing, value]
        else:
            node[name] = [value] if name in EML_ARRAY_TAGS else value

    text = "".join(text_parts).strip()
    if not node:
        return text
    if text:
        node[EML_TEXT_KEY] = text
    return node


def _qualified_name(elem: _Element, tag: str) -> str:
    """Render ``{uri}local`` as ``prefix:local`` using the element's namespace map."""
    from lxml import etree  # type: ignore[attr-defined]

    qname = etree.QName(tag)
    if qname.namespace is None:
        return qname.localname
    for prefix, uri in elem.nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname
