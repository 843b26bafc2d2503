"""Processing layers for the proposal deck pipeline."""

# Note: Import layers individually to avoid circular imports
# Use: from app.layers.layer1_catalog.normalizer import RowNormalizer
# Use: from app.layers.layer2_specs import BulletExtractor
# Use: from app.layers.layer3_images import ImageResolver
# Use: from app.layers.layer4_deck import DeckAssembler

__all__ = [
    "layer1_catalog",
    "layer2_specs",
    "layer3_images",
    "layer4_deck",
]
