import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class InMemorySource:
    """Entity source over plain lists that counts how often it is read."""

    def __init__(self, points=(), lines=()):
        self.points = list(points)
        self.lines = list(lines)
        self.point_passes = 0
        self.line_passes = 0

    def iter_points(self):
        self.point_passes += 1
        return iter(self.points)

    def iter_lines(self):
        self.line_passes += 1
        return iter(self.lines)


@pytest.fixture()
def make_source():
    return InMemorySource


@pytest.fixture()
def planar():
    """Projector for tests: latitude becomes ``y`` and longitude ``x``."""

    def project(lat, lon):
        return int(lon), int(lat)

    return project


@pytest.fixture(autouse=True)
def _restore_package_logger():
    # ``configure_logging`` detaches the package logger from the root logger,
    # which would hide records from ``caplog`` in later tests.
    logger = logging.getLogger("osm_svg")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


# Nodes 1 and 2 lie in Amersfoort, near the RD origin (155000, 463000);
# node 3 lies in Groningen, far outside any Amersfoort region.
OSM_XML = """<?xml version='1.0' encoding='UTF-8'?>
<osm version="0.6" generator="osm-svg tests">
  <node id="1" version="1" lat="52.1551744" lon="5.3872062"/>
  <node id="2" version="1" lat="52.1570000" lon="5.3890000"/>
  <node id="3" version="1" lat="53.2194000" lon="6.5665000"/>
  <way id="7" version="1">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="building" v="house"/>
    <tag k="name" v="Jansen &amp; Co"/>
  </way>
  <way id="8" version="1">
    <nd ref="3"/>
    <tag k="highway" v="primary"/>
  </way>
</osm>
"""


@pytest.fixture()
def osm_file(tmp_path: Path) -> Path:
    path = tmp_path / "extract.osm"
    path.write_text(OSM_XML, encoding="utf8")
    return path
