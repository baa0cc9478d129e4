"""
Fault tests (codes, options, rendering and surfacing).

Scope
- FaultCode values are stable and normalize to strings.
- Options are frozen and readable as attributes.
- __replace__ keeps the type and message while merging options.
- trigger() raises errors and warns warnings unless shell mode prints them.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from commander.faults import *


def capture(renderable) -> str:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class FaultCodeTest(TestCase):

    def testStableValues(self) -> None:
        self.assertEqual(FaultCode.NO_SUBCOMMAND, 11100)
        self.assertEqual(FaultCode.UNKNOWN_COMMAND, 11101)
        self.assertEqual(FaultCode.UNKNOWN_FLAG, 11112)

    def testNormalize(self) -> None:
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")

    def testGetdoc(self) -> None:
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))
        with self.assertRaises(TypeError):
            getdoc(11101)


class FaultTest(TestCase):
    """
    faults carry a message plus read-only options.
    """

    def setUp(self) -> None:
        self.fault = UnknownFlagError(
            "flag provided but not defined: -x",
            title="unknown flag",
            code=FaultCode.UNKNOWN_FLAG,
            hint="known flags: --verbose",
            token="-x",
        )

    def testMessage(self) -> None:
        self.assertEqual(str(self.fault), "flag provided but not defined: -x")
        self.assertEqual(self.fault.args, ("flag provided but not defined: -x",))

    def testOptionsAsAttributes(self) -> None:
        self.assertEqual(self.fault.token, "-x")
        with self.assertRaises(AttributeError):
            self.fault.missing

    def testOptionsAreReadOnly(self) -> None:
        with self.assertRaises(TypeError):
            self.fault.options["token"] = "-y"  # type: ignore[index]

    def testReplace(self) -> None:
        replaced = self.fault.__replace__(token="-y", shell=False)
        self.assertIsInstance(replaced, UnknownFlagError)
        self.assertEqual(replaced.message, self.fault.message)
        self.assertEqual(replaced.token, "-y")
        self.assertEqual(self.fault.token, "-x")

    def testHierarchy(self) -> None:
        self.assertIsInstance(self.fault, ParseError)
        self.assertIsInstance(self.fault, CommandException)
        self.assertTrue(issubclass(InvalidHandlerError, TypeError))
        self.assertTrue(issubclass(ShadowedCommandWarning, Warning))

    def testRender(self) -> None:
        output = capture(self.fault)
        self.assertIn("[ commander — 11112 | Unknown Flag ]", output)
        self.assertIn("flag provided but not defined: -x", output)
        self.assertIn(" → known flags: --verbose", output)

    def testRenderUsesTool(self) -> None:
        class Tool:
            prog = "car"

        self.assertIn("[ car — ", capture(self.fault.__replace__(tool=Tool())))

    def testRenderFancy(self) -> None:
        output = capture(self.fault.__replace__(fancy=True))
        self.assertIn("Unknown Flag", output)
        self.assertIn("╭", output)


class TriggerTest(TestCase):

    def testRaisesErrors(self) -> None:
        with self.assertRaises(UnknownCommandError):
            trigger(UnknownCommandError("unknown command: fly"))

    def testWarnsWarnings(self) -> None:
        with self.assertWarns(ShadowedCategoryWarning):
            trigger(ShadowedCategoryWarning("category 'Engine' was replaced"))

    def testShellPrintsAndExits(self) -> None:
        errors = io.StringIO()
        with self.assertRaises(SystemExit) as caught:
            trigger(
                NoSubcommandError("no subcommand provided", code=FaultCode.NO_SUBCOMMAND),
                shell=True,
                console=Console(file=errors),
            )
        self.assertEqual(caught.exception.code, 1)
        self.assertIn("no subcommand provided", errors.getvalue())

    def testShellPrintsWarnings(self) -> None:
        errors = io.StringIO()
        trigger(ShadowedCommandWarning("command 'start' was replaced"), shell=True, console=Console(file=errors))
        self.assertIn("command 'start' was replaced", errors.getvalue())

    def testRejectsNonFaults(self) -> None:
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
