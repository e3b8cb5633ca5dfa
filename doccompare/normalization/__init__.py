from doccompare.normalization.base import BaseNormalizer
from doccompare.normalization.normalizer import TextNormalizer, normalize

__all__ = ["BaseNormalizer", "TextNormalizer", "normalize"]
