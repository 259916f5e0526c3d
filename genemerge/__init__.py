"""
genemerge: clusters and reconciles gene models from a curated and an automatic annotation source
"""
__version__ = '1.0.0'
