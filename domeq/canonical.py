""" Canonicalization of ``lxml`` document trees and elements to text that can be compared
    for equality.
"""
import logging
from os import getenv
from typing import Optional, Tuple, Union

from lxml import etree

from domeq.exceptions import ParseError


DEFAULT_XML_VERSION = '1.0'
XML_VERSION_ENV_VARIABLE = 'DOMEQ_DEFAULT_XML_VERSION'

DOMNodeType = Union[etree._Element, etree._ElementTree]


logger = logging.getLogger(__name__)
dbg = logger.debug


def is_dom_node(obj) -> bool:
    """ Tests whether ``obj`` is an element or a document tree. """
    return isinstance(obj, (etree._Element, etree._ElementTree))


def is_document(obj) -> bool:
    """ Tests whether ``obj`` is a whole document rather than a node within one. """
    return isinstance(obj, etree._ElementTree)


def xml_declaration(version: str, encoding: Optional[str] = None) -> str:
    if encoding is None:
        return '<?xml version="{}"?>'.format(version)
    return '<?xml version="{}" encoding="{}"?>'.format(version, encoding)


def _read_declaration(node: DOMNodeType) -> Tuple[str, Optional[str]]:
    default_version = getenv(XML_VERSION_ENV_VARIABLE, DEFAULT_XML_VERSION)
    # only documents declare these, and only once they have a root
    if is_document(node) and node.getroot() is not None:
        docinfo = node.docinfo
        return docinfo.xml_version or default_version, docinfo.encoding
    return default_version, None


def _c14n(node: DOMNodeType, exclusive: bool, with_comments: bool) -> bytes:
    if is_document(node) and node.getroot() is None:
        return b''
    return etree.tostring(node, method='c14n', exclusive=exclusive,
                          with_comments=with_comments)


def _reparse(shell: str, canonical: bytes,
             remove_blank_text: bool) -> etree._ElementTree:
    parser = etree.XMLParser(remove_blank_text=remove_blank_text,
                             resolve_entities=True)
    source = shell.encode('ascii') + b'\n' + canonical
    try:
        return etree.fromstring(source, parser=parser).getroottree()
    except etree.XMLSyntaxError as e:
        text = canonical.decode('utf-8', errors='replace')
        raise ParseError('The canonical form of a node is not well-formed: '
                         '{}'.format(e), text) from e


def node_to_text(node: DOMNodeType, ignore_case: bool = False,
                 exclusive: bool = False, with_comments: bool = False,
                 remove_blank_text: bool = True) -> str:
    """ Returns the normalized, whitespace-cleaned and indented textual representation
        of an element or a document.

        The node is serialized with C14N, which fixes the order of attributes and the
        namespace declarations, and that result is parsed again into a new document of
        the node's XML version. Whitespace-only text between elements is dropped by that
        parser unless ``remove_blank_text`` is ``False``. The new document is then
        serialized with indentations and prefixed with an XML declaration. The declared
        encoding of the source document is re-applied only to that declaration, the
        canonical bytes are always parsed as UTF-8.

        :param node: An element or a document tree.
        :param ignore_case: Unless this is ``True``, the result is converted to lower
                            case. Yes, that's the opposite of what one might expect.
        :param exclusive: Use exclusive C14N.
        :param with_comments: Keep comments in the canonical form.
        :param remove_blank_text: Drop whitespace-only text between elements.
        :returns: The canonical text including the XML declaration.
    """
    if not is_dom_node(node):
        raise TypeError('Expected an lxml element or element tree, got {}.'.format(
            type(node).__name__))

    version, encoding = _read_declaration(node)
    dbg("Canonicalizing {} with XML version '{}' and encoding '{}'.".format(
        node, version, encoding))
    shell = xml_declaration(version)

    canonical = _c14n(node, exclusive, with_comments)
    if canonical:
        document = _reparse(shell, canonical, remove_blank_text)
        body = etree.tostring(document, encoding='unicode', pretty_print=True)
    else:
        dbg('The node has no content.')
        body = ''

    text = xml_declaration(version, encoding) + '\n' + body
    return text if ignore_case else text.lower()


__all__ = [
    'DEFAULT_XML_VERSION', 'DOMNodeType', 'XML_VERSION_ENV_VARIABLE',
    is_document.__name__, is_dom_node.__name__,
    node_to_text.__name__, xml_declaration.__name__,
]
