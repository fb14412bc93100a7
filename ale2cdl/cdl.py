from __future__ import annotations

import re

from .errors import ErrorKind, ValidationError
from .models import ClipRecord, OutputArtifact, SOPTriplet
from .rules import CDL_EXTENSION, CDL_NAMESPACE, CDL_TEMPLATE

# (slope)(offset)(power), e.g. "(1.1072 1.0000 1.0000)(-0.1072 0.0000 0.0000)(1.0000 1.0000 1.0000)"
_SOP_GROUP = re.compile(r"\(.*?\)")
_EXTENSION = re.compile(r"\.[^/.]+$")


def parse_sop(sop: str) -> SOPTriplet:
    """
    Split an ASC_SOP value into its slope, offset and power groups.

    Group contents are kept verbatim apart from the parentheses and the
    whitespace around them; the numbers are not parsed.
    """
    groups = _SOP_GROUP.findall(sop)
    if len(groups) != 3:
        raise ValidationError("invalid SOP format", kind=ErrorKind.INVALID_SOP_FORMAT)

    slope, offset, power = (
        group.replace("(", "").replace(")", "").strip() for group in groups
    )
    return SOPTriplet(slope=slope, offset=offset, power=power)


def cdl_filename(name: str) -> str:
    # only the last extension goes: "a.b.c" -> "a.b.cdl"
    return _EXTENSION.sub("", name) + CDL_EXTENSION


def render_cdl(record: ClipRecord) -> str:
    sop = parse_sop(record.ASC_SOP)
    return CDL_TEMPLATE.format(
        namespace=CDL_NAMESPACE,
        description=record.Name,
        slope=sop.slope,
        offset=sop.offset,
        power=sop.power,
        saturation=record.ASC_SAT,
    )


def build_artifact(record: ClipRecord) -> OutputArtifact:
    try:
        content = render_cdl(record)
    except ValidationError:
        raise
    except Exception as exc:
        raise ValidationError(
            "error generating XML content",
            kind=ErrorKind.XML_GENERATION_FAILURE,
        ) from exc

    return OutputArtifact(filename=cdl_filename(record.Name), content=content)
