"""Read RLL routines from L5X exports and write rungs back as L5X XML.

Only the ladder content is handled: ``RLLContent/Rung`` text and comments.
Rung text is handed to the permissive rung parser as-is; only the XML around
it can fail to load.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from ladderview.core.rung import Routine, Rung
from ladderview.core.serializer import rung_text

logger = logging.getLogger(__name__)

ROOT_TAG = "RSLogix5000Content"


class L5XFormatError(ValueError):
    """Raised when an L5X document cannot be read."""


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def _load(source: str | bytes | Path) -> etree._Element:
    if isinstance(source, Path):
        logger.info("Loading L5X file: %s", source)
        raw = source.read_bytes()
    elif isinstance(source, str):
        raw = source.encode("utf-8")
    else:
        raw = source

    if raw.startswith(b"\xef\xbb\xbf"):
        raw = raw[3:]

    parser = etree.XMLParser(remove_blank_text=False, strip_cdata=False, recover=False)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise L5XFormatError(f"Invalid L5X XML: {exc}") from exc
    return root


def _cdata_text(element: etree._Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def read_rungs(rll_content: etree._Element) -> list[Rung]:
    """Build rungs from an ``RLLContent`` element.

    The ``Number`` attribute is used when present and numeric, otherwise the
    rung's position.
    """
    rungs: list[Rung] = []
    for position, element in enumerate(rll_content.findall("Rung")):
        number_attr = element.get("Number")
        number = int(number_attr) if number_attr and number_attr.isdigit() else position
        text = _cdata_text(element.find("Text")) or ""
        comment = _cdata_text(element.find("Comment"))
        rungs.append(Rung.from_text(number, text, comment))
    return rungs


def read_routines(source: str | bytes | Path) -> list[Routine]:
    """Return every RLL routine in an L5X document.

    Routines are named ``Program/Routine``. Non-ladder routines are skipped.
    """
    root = _load(source)
    if root.tag != ROOT_TAG:
        raise L5XFormatError(f"Expected root element {ROOT_TAG!r}, got {root.tag!r}")

    routines: list[Routine] = []
    for program in root.iterfind("Controller/Programs/Program"):
        program_name = program.get("Name", "Unknown")
        for routine in program.iterfind("Routines/Routine"):
            rll = routine.find("RLLContent")
            if routine.get("Type", "RLL") != "RLL" or rll is None:
                continue
            name = f"{program_name}/{routine.get('Name', 'Unknown')}"
            routines.append(Routine(name=name, rungs=read_rungs(rll)))
            logger.debug("Read routine %s (%d rungs)", name, len(routines[-1].rungs))

    logger.info("Loaded %d RLL routine(s)", len(routines))
    return routines


def find_routine(routines: list[Routine], name: str) -> Routine:
    """Look up a routine by ``Program/Routine`` or bare routine name."""
    for routine in routines:
        if routine.name == name or routine.name.rpartition("/")[2] == name:
            return routine
    raise KeyError(name)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def _terminated(text: str) -> str:
    text = text.strip()
    return text if text.endswith(";") else text + ";"


def rung_element(rung: Rung, *, regenerate: bool = False) -> etree._Element:
    """Build ``<Rung Number="N" Type="N">`` with CDATA comment and text.

    With ``regenerate`` the text is produced from the parse tree instead of
    the stored ``text``.
    """
    element = etree.Element("Rung", attrib={"Number": str(rung.number), "Type": "N"})
    if rung.comment is not None:
        comment = etree.SubElement(element, "Comment")
        comment.text = etree.CDATA(rung.comment)
    text = etree.SubElement(element, "Text")
    body = rung_text(rung.parsed) if regenerate else _terminated(rung.text)
    text.text = etree.CDATA(body)
    return element


def routine_element(routine: Routine, *, regenerate: bool = False) -> etree._Element:
    name = routine.name.rpartition("/")[2]
    element = etree.Element("Routine", attrib={"Name": name, "Type": "RLL"})
    rll = etree.SubElement(element, "RLLContent")
    for rung in routine.rungs:
        rll.append(rung_element(rung, regenerate=regenerate))
    return element


def routine_to_xml(routine: Routine, *, regenerate: bool = False) -> str:
    element = routine_element(routine, regenerate=regenerate)
    return etree.tostring(element, pretty_print=True, encoding="unicode")
