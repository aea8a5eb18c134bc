from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .codec import Image, read_tga

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 20


@dataclass
class ComparisonReport:
    actual: Image
    expected: Image
    header_diffs: List[int] = field(default_factory=list)
    pixel_diffs: List[int] = field(default_factory=list)

    @property
    def length_mismatch(self) -> bool:
        return len(self.actual.pixels) != len(self.expected.pixels)

    @property
    def matches(self) -> bool:
        return not (self.header_diffs or self.pixel_diffs or self.length_mismatch)


def compare_images(actual: Image, expected: Image) -> ComparisonReport:
    """Diff two images header byte by header byte and pixel by pixel."""
    report = ComparisonReport(actual, expected)
    actual_header = actual.header.to_bytes()
    expected_header = expected.header.to_bytes()
    report.header_diffs = [i for i, (a, b) in enumerate(zip(actual_header, expected_header)) if a != b]
    report.pixel_diffs = [i for i, (a, b) in enumerate(zip(actual.pixels, expected.pixels)) if a != b]
    return report


def compare_files(actual_path: str, expected_path: str) -> ComparisonReport:
    report = compare_images(read_tga(actual_path), read_tga(expected_path))
    if not report.matches:
        logger.warning(
            "%s differs from %s: %d header byte(s), %d pixel(s)",
            actual_path,
            expected_path,
            len(report.header_diffs),
            len(report.pixel_diffs),
        )
    return report


def format_report(report: ComparisonReport, max_lines: int = DEFAULT_MAX_LINES) -> List[str]:
    if report.matches:
        return ["Images match"]
    lines: List[str] = []
    if report.length_mismatch:
        lines.append(
            f"Pixel count doesn't match: Actual: {len(report.actual.pixels)}, "
            f"Expected: {len(report.expected.pixels)}"
        )
    actual_header = report.actual.header.to_bytes()
    expected_header = report.expected.header.to_bytes()
    for index in report.header_diffs:
        lines.append(f"Byte {index} doesn't match: Actual: {actual_header[index]}, Expected: {expected_header[index]}")
    for index in report.pixel_diffs:
        lines.append(
            f"Pixel {index} doesn't match: Actual: {report.actual.pixels[index]}, "
            f"Expected: {report.expected.pixels[index]}"
        )
    if len(lines) > max_lines:
        hidden = len(lines) - max_lines
        lines = lines[:max_lines] + [f"... {hidden} more difference(s)"]
    return lines
