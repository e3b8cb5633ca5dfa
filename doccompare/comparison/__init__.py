from doccompare.comparison.comparator import TextComparator, compare, similarity_score
from doccompare.comparison.models import Change, ComparisonResult

__all__ = ["Change", "ComparisonResult", "TextComparator", "compare", "similarity_score"]
