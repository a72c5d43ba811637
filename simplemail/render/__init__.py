"""MIME payload rendering."""

from simplemail.render.mime import build_mime_message, write_eml_file

__all__ = ["build_mime_message", "write_eml_file"]
