"""
Sub-package Documentation
==========================

The cluster sub-package is responsible for grouping transcripts from both annotation sources into genes. Coding
transcripts are clustered by overlap of their coding exons and non-coding (processed and pseudogene) transcripts by
overlap of any exon. Pseudogene clusters which overlap the coding exons of a coding cluster sufficiently are then
absorbed into it.
"""
