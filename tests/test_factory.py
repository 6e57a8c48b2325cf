import logging
from threading import Barrier, Thread

from pytest import raises

import domeq
from domeq import (
    __version__,
    Comparator,
    ComparisonFailure,
    DOMNodeComparator,
    Factory,
    NoComparatorError,
    ScalarComparator,
    TypeComparator,
)

from tests import document, element


class AlwaysEqual(Comparator):
    def accepts(self, expected, actual):
        return True

    def assert_equals(self, expected, actual, delta=0.0, canonicalize=False,
                      ignore_case=False, processed=None):
        pass


def test_version():
    assert isinstance(__version__, str)


def test_default_comparators(factory):
    assert [type(x) for x in factory.default_comparators] == \
        [DOMNodeComparator, ScalarComparator, TypeComparator]
    assert all(x.factory is factory for x in factory.default_comparators)


def test_dispatch_to_dom_nodes(factory, debug_logging):
    comparator = factory.get_comparator_for(element('<root/>'), document('<root/>'))
    assert isinstance(comparator, DOMNodeComparator)

    factory.assert_equals(element('<root b="2" a="1"/>'), element('<root a="1" b="2"/>'))
    with raises(ComparisonFailure) as excinfo:
        factory.assert_equals(document('<root><a>X</a></root>'),
                              document('<root><a>Y</a></root>'))
    assert 'documents' in excinfo.value.message


def test_node_and_string_fall_through(factory):
    node = element('<root/>')

    assert not factory.default_comparators[0].accepts(node, '<root/>')
    assert isinstance(factory.get_comparator_for(node, '<root/>'), TypeComparator)
    with raises(ComparisonFailure) as excinfo:
        factory.assert_equals(node, '<root/>')
    assert 'DOM' not in excinfo.value.message


def test_options_are_passed(factory):
    factory.assert_equals(1.0, 1.05, delta=0.1)
    factory.assert_equals('Foo', 'foo', ignore_case=True)
    with raises(ComparisonFailure):
        factory.assert_equals('Foo', 'foo')


def test_register_and_unregister(factory):
    first, second = AlwaysEqual(), AlwaysEqual()

    factory.register(first)
    factory.register(second)
    assert first.factory is factory
    assert factory.get_comparator_for(1, 2) is second
    factory.assert_equals(1, 2)

    factory.unregister(second)
    assert factory.get_comparator_for(1, 2) is first

    factory.reset()
    assert isinstance(factory.get_comparator_for(1, 2), ScalarComparator)
    with raises(ComparisonFailure):
        factory.assert_equals(1, 2)


def test_no_comparator(factory):
    factory.default_comparators.clear()
    with raises(NoComparatorError) as excinfo:
        factory.get_comparator_for(element('<root/>'), 'root')
    assert isinstance(excinfo.value, LookupError)
    assert 'str' in str(excinfo.value)


def test_shared_instance():
    assert Factory.get_instance() is Factory.get_instance()
    domeq.assert_equals(element('<root><a/></root>'), element('<root><a /></root>'))
    with raises(ComparisonFailure):
        domeq.assert_equals(element('<root><a/></root>'), element('<root><b/></root>'))


def test_registration_is_logged(factory, caplog):
    comparator = AlwaysEqual()

    with caplog.at_level(logging.INFO, logger='domeq'):
        factory.register(comparator)
        factory.unregister(comparator)

    messages = [x.getMessage() for x in caplog.records if x.levelno == logging.INFO]
    assert messages == ['Registering <AlwaysEqual>.', 'Unregistering <AlwaysEqual>.']


def test_shared_instance_across_threads(monkeypatch):
    monkeypatch.setattr(Factory, '_instance', None)
    barrier = Barrier(8)
    instances = []

    def get_instance():
        barrier.wait()
        instances.append(Factory.get_instance())

    threads = [Thread(target=get_instance) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(instances) == 8
    assert all(x is instances[0] for x in instances)
