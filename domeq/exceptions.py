import logging
from typing import Any, List

from domeq.utils import make_diff


logger = logging.getLogger(__name__)
dbg = logger.debug


class DomeqException(Exception):
    """ Base class for domeq exceptions. """
    pass


class NoComparatorError(DomeqException, LookupError):
    """ Raised by :meth:`domeq.Factory.get_comparator_for` when no registered comparator
        accepts a pair of values.
    """
    def __init__(self, expected: Any, actual: Any) -> None:
        super().__init__(
            'No comparator is registered for {} and {}.'.format(
                type(expected).__name__, type(actual).__name__))
        self.expected = expected
        self.actual = actual


class ParseError(DomeqException):
    """ Raised when the canonical form of a node can't be parsed again. The
        canonical text is available as ``text``, the parser's error is chained.
    """
    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class ComparisonFailure(DomeqException, AssertionError):
    """ Signals that two values aren't equal. Beside the original values it holds their
        textual representations that were compared, so that a reporter can render a diff
        without knowing anything about the comparator that raised it.

        :param expected: The expected value.
        :param actual: The actual value.
        :param expected_as_string: The compared representation of ``expected``.
        :param actual_as_string: The compared representation of ``actual``.
        :param identical: Whether an identity check failed rather than an equality check.
        :param message: A human readable description.
        :param documents: Whether the compared values are whole documents.
    """
    def __init__(self, expected: Any, actual: Any,
                 expected_as_string: str, actual_as_string: str,
                 identical: bool = False, message: str = '',
                 documents: bool = False) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.expected_as_string = expected_as_string
        self.actual_as_string = actual_as_string
        self.identical = identical
        self.message = message
        self.documents = documents
        dbg('{} is evoked.'.format(self.__class__.__name__))

    @property
    def diff(self) -> str:
        """ A unified diff of the compared representations, empty if there are none. """
        if not self.expected_as_string and not self.actual_as_string:
            return ''
        return make_diff(self.expected_as_string, self.actual_as_string)

    def to_string(self) -> str:
        result: List[str] = [self.message]
        diff = self.diff
        if diff:
            result.append(diff)
        return ''.join(result)

    def __str__(self):
        return self.to_string()


__all__ = [
    ComparisonFailure.__name__, DomeqException.__name__,
    NoComparatorError.__name__, ParseError.__name__,
]
