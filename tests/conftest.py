import pytest

HEADER = "Name\tASC_SOP\tASC_SAT"


def _build_ale(header=HEADER, rows=(), data_marker=True, newline="\n"):
    lines = [
        "Heading",
        "FIELD_DELIM\tTABS",
        "VIDEO_FORMAT\t1080",
        "FPS\t24",
        "",
        "Column",
        header,
        "",
    ]
    if data_marker:
        lines.append("Data")
    lines.extend(rows)
    return newline.join(lines) + newline


@pytest.fixture
def make_ale():
    return _build_ale


@pytest.fixture
def ale_text():
    return _build_ale(rows=[
        "A001C001.mov\t(1.1072 1.0000 1.0000)(-0.1072 0.0000 0.0000)(1.0000 1.0000 1.0000)\t0.9",
        "A001C002.mov\t(1 1 1)(0 0 0)(1 1 1)\t1.0",
    ])
