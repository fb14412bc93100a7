"""
ALE and CDL format rules.

Markers and column names are matched exactly (case-sensitive, after trimming).
"""

COLUMN_MARKER = "Column"
DATA_MARKER = "Data"
COMMENT_PREFIX = "#"
FIELD_DELIMITER = "\t"

# How many lines after the Column marker may hold the header row
HEADER_WINDOW = 20

REQUIRED_COLUMNS = ("Name", "ASC_SOP", "ASC_SAT")

CDL_NAMESPACE = "urn:ASC:CDL:v1.01"
CDL_EXTENSION = ".cdl"

# Values are interpolated verbatim; nothing is XML-escaped.
CDL_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<ColorDecisionList xmlns="{namespace}">
    <ColorDecision>
        <ColorCorrection>
            <SOPNode>
                <Description>{description}</Description>
                <Slope>{slope}</Slope>
                <Offset>{offset}</Offset>
                <Power>{power}</Power>
            </SOPNode>
            <SATNode>
                <Saturation>{saturation}</Saturation>
            </SATNode>
        </ColorCorrection>
    </ColorDecision>
</ColorDecisionList>"""
