"""labelreader -- Spoken product-label reader for visually-impaired users.

This package captures one or more camera frames of a product, sends them
to a multimodal vision model for structured analysis, and speaks the
result aloud with haptic cues. Follow-up questions about the scanned
product are answered by the same model and narrated on their own.
"""

__version__ = "0.1.0"
