"""Line record dataset loading."""

from loctimeline.extraction.loader import LineRecordLoader, LoaderError, load_line_records, parse_rows

__all__ = ["LineRecordLoader", "LoaderError", "load_line_records", "parse_rows"]
