""" Custom errors for votecast. """


class VotecastError(Exception):
    """ Base class for all errors raised by votecast. """


class EmptyInputError(VotecastError):
    """
    Raised when results are summed over an empty collection. There is no
    neutral record to infer the number of options from.
    """


class NoCandidatesError(VotecastError):
    """ Raised when a best match is requested from an empty pool. """


class InsufficientDataError(VotecastError):
    """
    Raised when a historical dataset has no usable reference units for
    a unit that has to be projected.
    """


class DivisionByZeroError(VotecastError, ZeroDivisionError):
    """
    Raised when a unit is projected from a reference unit with
    no eligible voters.
    """


class DatasetError(VotecastError):
    """
    Raised when a dataset is constructed from inconsistent records
    (duplicate ids, mixed option counts) or a source table lacks
    the configured columns.
    """


class ConfigError(VotecastError):
    """ Raised when a configuration file is malformed. """
