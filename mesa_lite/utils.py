"""Utility functions for mesa_lite."""


def copydoc(fromfunc, sep="\n"):
    """Copy the docstring of function or class.

    https://stackoverflow.com/a/13743316
    """

    def _decorator(func):
        sourcedoc = fromfunc.__doc__
        if func.__doc__ is None:
            func.__doc__ = sourcedoc
        else:
            func.__doc__ = sep.join([sourcedoc, func.__doc__])
        return func

    return _decorator
