from lxml import etree


def document(text):
    """ Parses ``text`` to a whole document. Passing bytes allows to declare an
        encoding. """
    if isinstance(text, str):
        text = text.encode('utf-8')
    return etree.fromstring(text).getroottree()


def element(text):
    return etree.fromstring(text)
