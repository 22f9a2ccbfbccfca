"""
Tests for the Unset sentinel and the small helpers in parley.utils.

This module verifies:
- Singleton identity and finality of UnsetType.
- Falsy semantics and representation.
- coalesce() preserving None and other falsey values.
- rename() in function and decorator forms.
"""
import copy
import unittest
from unittest import TestCase

from parley.utils import Unset, UnsetType, coalesce, rename


class UnsetTest(TestCase):
    """Test suite for the `Unset` singleton."""

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyKeepsIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnionIsinstance(self) -> None:
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("text", str | Unset))
        self.assertFalse(isinstance(3, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Child(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):
    """Test suite for coalesce() and rename()."""

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")

    def testRenameFunctionForm(self) -> None:
        def work():
            pass

        self.assertIs(rename(work, "task"), work)
        self.assertEqual((work.__name__, work.__qualname__), ("task", "task"))

    def testRenameDecoratorForm(self) -> None:
        @rename("task")
        def work():
            pass

        self.assertEqual(work.__name__, "task")

    def testRenameArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()


if __name__ == "__main__":
    unittest.main()
