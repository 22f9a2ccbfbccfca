"""
Verb and dispatcher behavioral tests (apply, notices, failures, single action).

Scope
- Validate that the action runs exactly once, with or without options.
- Validate unknown-key notices and that they never stop the dispatch.
- Validate conversion failures: no rollback, no action, key attached.
- Validate the Verb contract (help text, bindings, abstractness).

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Verb, dispatch, parse, integer).
"""
import unittest
import warnings
from unittest import TestCase

from parley import (
    Verb,
    Outcome,
    BindingTable,
    dispatch,
    parse,
    integer,
    ConversionError,
    UnknownOptionWarning,
    FaultCode,
)


class Probe(Verb):
    """probe verb used by the dispatcher tests"""

    def __init__(self):
        super().__init__()
        self.calls = 0
        self.switch = False
        self.text = None
        self.num = 0
        self.bind("s", self.toggle, "switch")
        self.bind("t", self.write, "text")
        self.bind("n", self.count, "num")

    def toggle(self, value):
        self.switch = not self.switch

    def write(self, value):
        self.text = value

    def count(self, value):
        self.num = integer(value)

    def __call__(self):
        self.calls += 1
        return "switch=%s text=%s num=%d" % (self.switch, self.text, self.num)


class Silent(Verb):
    def __call__(self):
        return ""


class TestDispatch(TestCase):
    """Behavioral tests for dispatch()."""

    def setUp(self):
        self.probe = Probe()

    def testEmptyOptionsStillRunAction(self):
        outcome = dispatch({}, self.probe)
        self.assertEqual(outcome, Outcome("switch=False text=None num=0", ()))
        self.assertEqual(self.probe.calls, 1)

    def testResolvedLineIsApplied(self):
        outcome = dispatch(parse("-sn 20 --text words_no_spaces"), self.probe)
        self.assertTrue(self.probe.switch)
        self.assertEqual(self.probe.num, 20)
        self.assertEqual(self.probe.text, "words_no_spaces")
        self.assertEqual(outcome.result, "switch=True text=words_no_spaces num=20")

    def testUnknownKeyIsReportedAndSkipped(self):
        received = []
        outcome = dispatch({"s": None, "x": None, "n": "3"}, self.probe, notify=received.append)

        self.assertTrue(self.probe.switch)
        self.assertEqual(self.probe.num, 3)
        self.assertEqual(self.probe.calls, 1)
        self.assertEqual(outcome.unknowns, ("x",))
        self.assertEqual(len(received), 1)
        self.assertIsInstance(received[0], UnknownOptionWarning)
        self.assertEqual(received[0].options["key"], "x")
        self.assertIs(received[0].options["code"], FaultCode.UNKNOWN_OPTION)

    def testUnknownKeysWithoutNotifyAreOnlyCollected(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            outcome = dispatch({"x": None, "yy": "1"}, self.probe)
        self.assertEqual(caught, [])
        self.assertEqual(outcome.unknowns, ("x", "yy"))
        self.assertEqual(self.probe.calls, 1)

    def testNoticeSpellsShortAndLongKeys(self):
        received = []
        dispatch({"x": None, "extra": None}, self.probe, notify=received.append)
        self.assertEqual([warning.message for warning in received], [
            "no '-x' option found",
            "no '--extra' option found",
        ])

    def testConversionFailureStopsBeforeAction(self):
        with self.assertRaises(ConversionError) as context:
            dispatch({"s": None, "n": "abc", "t": "late"}, self.probe)

        self.assertEqual(context.exception.options["key"], "n")
        self.assertIs(context.exception.options["code"], FaultCode.CONVERSION_FAILURE)
        self.assertTrue(self.probe.switch)  # applied before the failure, kept
        self.assertIsNone(self.probe.text)  # after the failure, never applied
        self.assertEqual(self.probe.calls, 0)

    def testMissingValueForNumericOption(self):
        with self.assertRaises(ConversionError) as context:
            dispatch(parse("--num"), self.probe)
        self.assertEqual(context.exception.options["key"], "num")
        self.assertEqual(self.probe.calls, 0)

    def testForeignSetterErrorIsWrapped(self):
        def explode(value):
            raise RuntimeError("boom")

        self.probe.bind("b", explode)
        with self.assertRaises(ConversionError) as context:
            dispatch({"b": "1"}, self.probe)
        self.assertEqual(context.exception.options["key"], "b")
        self.assertIsInstance(context.exception.options["exception"], RuntimeError)
        self.assertIsInstance(context.exception.__cause__, RuntimeError)

    def testNonStringResultRejected(self):
        class Broken(Verb):
            def __call__(self):
                return 42

        with self.assertRaises(TypeError):
            dispatch({}, Broken())

    def testFreshInstancesDoNotShareState(self):
        dispatch(parse("-s --text once"), self.probe)
        other = Probe()
        self.assertEqual(dispatch({}, other).result, "switch=False text=None num=0")

    def testBadArguments(self):
        with self.assertRaises(TypeError):
            dispatch([("s", None)], self.probe)
        with self.assertRaises(TypeError):
            dispatch({}, object())
        with self.assertRaises(TypeError):
            dispatch({}, self.probe, notify="print")


class TestVerb(TestCase):
    """Behavioral tests for the Verb base type."""

    def testHelpFromDocstring(self):
        self.assertEqual(Probe().help, "probe verb used by the dispatcher tests")

    def testHelpFallback(self):
        self.assertEqual(Silent().help, Verb.__fallback__)

    def testExplicitHelpWins(self):
        self.assertEqual(Silent("says nothing").help, "says nothing")

    def testNonStringHelpRejected(self):
        with self.assertRaises(TypeError):
            Silent(3)

    def testVerbIsAbstract(self):
        with self.assertRaises(TypeError):
            Verb()

    def testBindingsAreOwnedPerInstance(self):
        probe = Probe()
        self.assertIsInstance(probe.bindings, BindingTable)
        self.assertEqual(sorted(probe.bindings), ["n", "num", "s", "switch", "t", "text"])
        self.assertIsNot(probe.bindings, Probe().bindings)

    def testBindKeepsFirstAndChains(self):
        probe = Probe()
        self.assertIs(probe.bind("s", probe.write), probe)
        self.assertEqual(probe.bindings["s"], probe.toggle)


if __name__ == "__main__":
    unittest.main()
