

class GeneMergeError(Exception):
    """
    base class for errors raised while building genes for a region
    """
    pass


class MalformedInputError(GeneMergeError):
    """
    raised when an annotation object is inconsistent, for example a coding region boundary which does not fall
    in any exon or an attempt to transfer evidence between transcripts with different exon counts
    """
    pass


class NotSpecifiedError(MalformedInputError):
    """
    raised when information is required for a function but has not been given

    for example if a region was required to fetch genes but none was given
    """
    pass


class ClusterIntegrityError(GeneMergeError):
    """
    raised when the clusters produced from a set of transcripts are not a partition of the input
    """
    pass


class UnclassifiableBiotypeError(GeneMergeError):
    """
    raised when a gene does not contain any transcript whose biotype maps to a known category
    """
    pass
