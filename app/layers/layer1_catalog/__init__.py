"""Layer 1: Catalog normalization (raw spreadsheet table -> product records).

# Note: Import modules individually to avoid circular imports
# Use: from app.layers.layer1_catalog.normalizer import RowNormalizer
# Use: from app.layers.layer1_catalog.header_map import HeaderMap, SheetRow
"""
