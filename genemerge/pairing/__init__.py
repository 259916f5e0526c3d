"""
reconciles redundant transcripts of the curated and automatic sources which were clustered into the same gene
"""
