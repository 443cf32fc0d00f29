"""
Mixin classes for mesa-lite abstract components.

Classes:
    CopyMixin(ABC):
        A mixin class that provides a fast copy method for classes that inherit it.
        Agent sets are views over agents owned by the model, so a copy of an
        agent set duplicates the membership mapping but never the agents or the
        model themselves.

Usage:
    from mesa_lite.abstract.mixin import CopyMixin

    class MyContainer(CopyMixin):
        _copy_with_method = {"_members": ("copy", [])}
        _copy_only_reference = ["_model"]

        def __init__(self, model):
            self._model = model
            self._members = {}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from copy import copy, deepcopy
from typing import Self


class CopyMixin(ABC):
    """A mixin class that provides a fast copy method for the class that inherits it."""

    _copy_with_method: dict[str, tuple[str, list[str]]] = {}
    _copy_only_reference: list[str] = [
        "_model",
    ]

    @abstractmethod
    def __init__(self): ...

    def copy(
        self,
        deep: bool = False,
        memo: dict | None = None,
        skip: list[str] | None = None,
    ) -> Self:
        """Create a copy of the Class.

        Parameters
        ----------
        deep : bool, optional
            Flag indicating whether to perform a deep copy.
            If True, all attributes will be recursively copied (except attributes in
            self._copy_only_reference and self._copy_with_method).
            If False, only the top-level attributes will be copied.
            Defaults to False.
        memo : dict | None, optional
            A dictionary used to track already copied objects during deep copy.
            Defaults to None.
        skip : list[str] | None, optional
            A list of attribute names to skip during the copy process.
            Defaults to None.

        Returns
        -------
        Self
            A new instance of the class that is a copy of the original instance.
        """
        cls = self.__class__
        obj = cls.__new__(cls)

        if skip is None:
            skip = []

        if deep:
            if not memo:
                memo = {}
            memo[id(self)] = obj
            for k, v in self.__dict__.items():
                if (
                    k not in self._copy_with_method
                    and k not in self._copy_only_reference
                    and k not in skip
                ):
                    setattr(obj, k, deepcopy(v, memo))
        else:
            for k, v in self.__dict__.items():
                if (
                    k not in self._copy_with_method
                    and k not in self._copy_only_reference
                    and k not in skip
                ):
                    setattr(obj, k, copy(v))

        # Copy attributes with a reference only
        for attr in self._copy_only_reference:
            setattr(obj, attr, getattr(self, attr))

        # Copy attributes with a specified method
        for attr in self._copy_with_method:
            attr_obj = getattr(self, attr)
            attr_copy_method, attr_copy_args = self._copy_with_method[attr]
            setattr(obj, attr, getattr(attr_obj, attr_copy_method)(*attr_copy_args))

        return obj

    def _get_obj(self, inplace: bool) -> Self:
        """Get the object to perform operations on.

        Parameters
        ----------
        inplace : bool
            If inplace, return self. Otherwise, return a copy.

        Returns
        -------
        Self
            The object to perform operations on.
        """
        if inplace:
            return self
        else:
            return deepcopy(self)

    def __copy__(self) -> Self:
        return self.copy(deep=False)

    def __deepcopy__(self, memo: dict) -> Self:
        return self.copy(deep=True, memo=memo)
