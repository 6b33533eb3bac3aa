from app.taxonomy.label_extractor import LabelExtractor
from app.taxonomy.loader import load_taxonomy
from app.taxonomy.models import Taxonomy

__all__ = ["LabelExtractor", "Taxonomy", "load_taxonomy"]
