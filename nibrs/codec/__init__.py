"""Codec — NIBRS record serialization."""

from nibrs.codec.xml import NIBRS_NAMESPACE, build_nibrs_xml, xml_filename

__all__ = ["NIBRS_NAMESPACE", "build_nibrs_xml", "xml_filename"]
