from importlib.metadata import version as _distribution_version
import logging
from numbers import Number
from threading import Lock
from types import SimpleNamespace
from typing import Any as AnyType, List, Optional, Set

from domeq.canonical import DOMNodeType, is_document, is_dom_node, node_to_text
from domeq.exceptions import (ComparisonFailure, DomeqException, NoComparatorError,
                              ParseError)


# constants


__version__ = _distribution_version('domeq')

SCALAR_TYPES = (type(None), bool, Number, str, bytes)


# logging


logger = logging.getLogger(__name__)
""" Module logger, configure as you need. """
dbg = logger.debug
nfo = logger.info


# helpers


def _is_scalar(obj: AnyType) -> bool:
    return isinstance(obj, SCALAR_TYPES)


def _as_string(obj: AnyType) -> str:
    return obj if isinstance(obj, str) else repr(obj)


# comparators


class Comparator:
    """ Base class for comparators. A comparator decides with :meth:`accepts` whether it
        can compare two values and then asserts their equality with
        :meth:`assert_equals`.

        The :class:`Factory` that registers a comparator binds itself to the comparator's
        ``factory`` attribute, so that comparators of nested structures can dispatch the
        comparison of their members.
    """
    def __init__(self):
        self.factory: Optional['Factory'] = None

    def accepts(self, expected: AnyType, actual: AnyType) -> bool:
        """ Returns whether the comparator can compare the two values. """
        raise NotImplementedError

    def assert_equals(self, expected: AnyType, actual: AnyType, delta: float = 0.0,
                      canonicalize: bool = False, ignore_case: bool = False,
                      processed: Set[int] = None) -> None:
        """ Asserts that two values are equal.

            :param expected: The first value to compare.
            :param actual: The second value to compare.
            :param delta: The allowed numerical distance between two values to consider
                          them equal.
            :param canonicalize: Sequences are sorted before comparison when set to
                                 ``True``.
            :param ignore_case: Case is ignored when set to ``True``.
            :param processed: The ids of already processed objects, used to prevent
                              infinite recursion.
            :raises ComparisonFailure: If the values aren't equal.
        """
        raise NotImplementedError

    def __repr__(self):
        return '<{}>'.format(self.__class__.__name__)


class DOMNodeComparator(Comparator):
    """ Compares ``lxml`` elements and element trees for equality by their canonical
        textual representations, see :func:`domeq.canonical.node_to_text`.

        :param config: Configuration values for the canonicalization, passed as keyword
                       arguments. The defaults are defined in :attr:`config_defaults`.

                       - ``exclusive`` selects exclusive C14N.
                       - ``remove_blank_text`` drops whitespace-only text between
                         elements.
                       - ``with_comments`` keeps comments.
    """
    config_defaults = {
        'exclusive': False,
        'remove_blank_text': True,
        'with_comments': False,
    }
    """ The default configuration values. """

    def __init__(self, **config: AnyType) -> None:
        super().__init__()
        self.config = SimpleNamespace(**config)
        self._set_config_defaults()

    def _set_config_defaults(self) -> None:
        for key, value in self.config_defaults.items():
            if not hasattr(self.config, key):
                dbg("Using default value '{}' for config key '{}'.".format(value, key))
                setattr(self.config, key, value)

    def accepts(self, expected: AnyType, actual: AnyType) -> bool:
        return is_dom_node(expected) and is_dom_node(actual)

    def assert_equals(self, expected: DOMNodeType, actual: DOMNodeType,
                      delta: float = 0.0, canonicalize: bool = False,
                      ignore_case: bool = False, processed: Set[int] = None) -> None:
        # delta, canonicalize and processed have no meaning for canonical texts
        expected_as_string = self.node_to_text(expected, ignore_case)
        actual_as_string = self.node_to_text(actual, ignore_case)

        if expected_as_string != actual_as_string:
            documents = is_document(expected)
            dbg('The canonical forms of the {} differ.'.format(
                'documents' if documents else 'nodes'))
            raise ComparisonFailure(
                expected, actual, expected_as_string, actual_as_string, False,
                'Failed asserting that two DOM {} are equal.\n'.format(
                    'documents' if documents else 'nodes'),
                documents=documents
            )

    def node_to_text(self, node: DOMNodeType, ignore_case: bool = False) -> str:
        """ Returns the canonical text of ``node`` as configured for this comparator. """
        return node_to_text(node, ignore_case,
                            exclusive=self.config.exclusive,
                            with_comments=self.config.with_comments,
                            remove_blank_text=self.config.remove_blank_text)


class ScalarComparator(Comparator):
    """ Compares ``None``, booleans, numbers, strings and bytes. Strings are compared
        case-insensitively if ``ignore_case`` is set, numbers within the given ``delta``.
    """

    def accepts(self, expected, actual):
        return _is_scalar(expected) and _is_scalar(actual)

    def assert_equals(self, expected, actual, delta=0.0, canonicalize=False,
                      ignore_case=False, processed=None):
        if self._are_numbers(expected, actual):
            try:
                if abs(expected - actual) <= delta:
                    return
            except TypeError:
                # e.g. Decimal and float can't be subtracted from each other
                if expected == actual:
                    return
        else:
            _expected, _actual = expected, actual
            if ignore_case and isinstance(expected, (str, bytes)) \
                    and isinstance(actual, (str, bytes)):
                _expected, _actual = expected.lower(), actual.lower()
            if _expected == _actual:
                return

        raise ComparisonFailure(
            expected, actual, _as_string(expected), _as_string(actual), False,
            'Failed asserting that {!r} matches expected {!r}.'.format(actual, expected)
        )

    @staticmethod
    def _are_numbers(*values):
        return all(isinstance(x, Number) and not isinstance(x, bool) for x in values)


class TypeComparator(Comparator):
    """ The last resort: accepts any values, fails if their types or the values differ. """

    def accepts(self, expected, actual):
        return True

    def assert_equals(self, expected, actual, delta=0.0, canonicalize=False,
                      ignore_case=False, processed=None):
        if type(expected) is not type(actual):
            raise ComparisonFailure(
                expected, actual, '', '', False,
                '{!r} does not match expected type "{}".'.format(
                    actual, type(expected).__name__)
            )
        if expected != actual:
            raise ComparisonFailure(
                expected, actual, _as_string(expected), _as_string(actual), False,
                'Failed asserting that two {} objects are equal.'.format(
                    type(expected).__name__)
            )


# dispatch


class Factory:
    """ Holds the comparators and picks the first that accepts a pair of values.
        Comparators that are added with :meth:`register` take precedence over the
        default ones and over those that were registered before.
    """
    __slots__ = ('custom_comparators', 'default_comparators')

    _instance: Optional['Factory'] = None
    _instance_lock = Lock()

    def __init__(self) -> None:
        self.custom_comparators: List[Comparator] = []
        self.default_comparators: List[Comparator] = []
        for comparator in (DOMNodeComparator(), ScalarComparator(), TypeComparator()):
            self._register_default(comparator)

    @classmethod
    def get_instance(cls) -> 'Factory':
        """ Returns the shared instance that :func:`assert_equals` uses. """
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
        return cls._instance

    def _register_default(self, comparator: Comparator) -> None:
        comparator.factory = self
        self.default_comparators.append(comparator)

    def register(self, comparator: Comparator) -> None:
        nfo('Registering {}.'.format(comparator))
        comparator.factory = self
        self.custom_comparators.insert(0, comparator)

    def unregister(self, comparator: Comparator) -> None:
        nfo('Unregistering {}.'.format(comparator))
        self.custom_comparators.remove(comparator)

    def reset(self) -> None:
        """ Removes all registered custom comparators. """
        self.custom_comparators.clear()

    def get_comparator_for(self, expected: AnyType, actual: AnyType) -> Comparator:
        for comparator in self.custom_comparators + self.default_comparators:
            if comparator.accepts(expected, actual):
                dbg('Selected {} for {} and {}.'.format(
                    comparator, type(expected).__name__, type(actual).__name__))
                return comparator
            dbg('{} does not accept the values.'.format(comparator))
        raise NoComparatorError(expected, actual)

    def assert_equals(self, expected: AnyType, actual: AnyType, delta: float = 0.0,
                      canonicalize: bool = False, ignore_case: bool = False,
                      processed: Set[int] = None) -> None:
        """ Dispatches the comparison to the first accepting comparator, see
            :meth:`Comparator.assert_equals` for the parameters.
        """
        if processed is None:
            processed = set()
        comparator = self.get_comparator_for(expected, actual)
        comparator.assert_equals(expected, actual, delta=delta,
                                 canonicalize=canonicalize, ignore_case=ignore_case,
                                 processed=processed)


def assert_equals(expected: AnyType, actual: AnyType, **options: AnyType) -> None:
    """ Asserts the equality of two values with the shared :class:`Factory` instance. """
    Factory.get_instance().assert_equals(expected, actual, **options)


__all__ = [
    '__version__', 'logger',
    ComparisonFailure.__name__, DomeqException.__name__,
    NoComparatorError.__name__, ParseError.__name__,
    Comparator.__name__, DOMNodeComparator.__name__,
    ScalarComparator.__name__, TypeComparator.__name__,
    Factory.__name__, assert_equals.__name__,
    'node_to_text',
]
