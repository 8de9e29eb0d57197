"""
NIBRS — Narrative-to-NIBRS mapping, validation and XML codec.

A deterministic engine that turns an AI-pre-extracted incident description
into a validated NIBRS record and serializes it to NIBRS 4.0 XML.

LLMs extract the description. LLMs do not decide the codes.
"""

__version__ = "0.1.0"
