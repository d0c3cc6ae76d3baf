#!/usr/bin/env python3
"""
In-process XLIFF engine.

Writes XLIFF 2.0 with ElementTree and reads either XLIFF 2.0
(``unit/segment``) or XLIFF 1.2 (``trans-unit``) back into a flat mapping.
Needs no Node.js installation.

XLIFF 2.0 structure written:
```xml
<?xml version='1.0' encoding='UTF-8'?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="ko">
  <file id="v1.0.0">
    <unit id="0d9f..._title">
      <segment>
        <source>Hello</source>
        <target></target>
      </segment>
    </unit>
  </file>
</xliff>
```
"""

import uuid
from pathlib import Path
from xml.etree import ElementTree as ET

from ..errors import ValidationError
from .base import ConversionEngine

XLIFF_20_NAMESPACE = "urn:oasis:names:tc:xliff:document:2.0"
XLIFF_12_NAMESPACE = "urn:oasis:names:tc:xliff:document:1.2"


class BuiltinEngine(ConversionEngine):
    """ElementTree-based engine producing XLIFF 2.0."""

    def __init__(self, file_id: str = "v1.0.0"):
        self.file_id = file_id

    @property
    def name(self) -> str:
        return "builtin"

    @property
    def description(self) -> str:
        return "In-process XLIFF 2.0 writer/reader (no Node.js required)"

    def to_xliff(
        self,
        source_map: dict[str, str],
        target_map: dict[str, str],
        src_lang: str,
        tgt_lang: str,
        workdir: Path,
    ) -> Path:
        ET.register_namespace("", XLIFF_20_NAMESPACE)
        ns = f"{{{XLIFF_20_NAMESPACE}}}"

        root = ET.Element(f"{ns}xliff", {
            "version": "2.0",
            "srcLang": src_lang,
            "trgLang": tgt_lang,
        })
        file_elem = ET.SubElement(root, f"{ns}file", {"id": self.file_id})

        for key, source_text in source_map.items():
            unit = ET.SubElement(file_elem, f"{ns}unit", {"id": key})
            segment = ET.SubElement(unit, f"{ns}segment")
            ET.SubElement(segment, f"{ns}source").text = _as_text(source_text)
            ET.SubElement(segment, f"{ns}target").text = _as_text(target_map.get(key, ""))

        ET.indent(root, space="  ")
        output = Path(workdir) / f"builtin_{uuid.uuid4().hex}_{tgt_lang}.xlf"
        ET.ElementTree(root).write(output, encoding="UTF-8", xml_declaration=True)
        return output

    def from_xliff(self, xliff_path: Path, src_lang: str, tgt_lang: str) -> dict[str, str]:
        try:
            root = ET.parse(xliff_path).getroot()
        except ET.ParseError as e:
            raise ValidationError(f"Invalid XLIFF: {e}")

        flat = {}

        # XLIFF 2.0: <unit id><segment><target>
        for unit in root.iter(f"{{{XLIFF_20_NAMESPACE}}}unit"):
            unit_id = unit.get("id")
            if unit_id is None:
                continue
            parts = [
                _element_text(target)
                for target in unit.iter(f"{{{XLIFF_20_NAMESPACE}}}target")
            ]
            flat[unit_id] = "".join(parts)

        # XLIFF 1.2: <trans-unit id><target>
        for unit in root.iter(f"{{{XLIFF_12_NAMESPACE}}}trans-unit"):
            unit_id = unit.get("id")
            if unit_id is None:
                continue
            target = unit.find(f"{{{XLIFF_12_NAMESPACE}}}target")
            flat[unit_id] = _element_text(target) if target is not None else ""

        return flat


def _as_text(value) -> str:
    return "" if value is None else str(value)


def _element_text(elem: ET.Element) -> str:
    """Text content of an element including inline markup children."""
    return "".join(elem.itertext())
