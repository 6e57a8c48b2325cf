from difflib import unified_diff


# helpers


__all__ = []


def export(func):
    __all__.append(func.__name__)
    return func


# utils


@export
def make_diff(expected: str, actual: str, from_label: str = 'Expected',
              to_label: str = 'Actual') -> str:
    """ Renders a unified diff between two texts.

        :param expected: The text that is considered as original.
        :param actual: The text that is considered as changed.
        :param from_label: The header for the original's lines, prefixed with ``---``.
        :param to_label: The header for the changed lines, prefixed with ``+++``.
        :returns: The diff, each line terminated with a newline. An empty string
                  if the texts are equal.
    """
    lines = unified_diff(expected.splitlines(keepends=True),
                         actual.splitlines(keepends=True),
                         fromfile=from_label, tofile=to_label)
    result = ''
    for line in lines:
        result += line if line.endswith('\n') else line + '\n'
    return result
