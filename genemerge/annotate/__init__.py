"""
annotation model: genes, transcripts, exons, translations and the evidence attached to them
"""
