"""
Registry tests (commands, categories, lookups and shadowing).

Scope
- Command validates its metadata and resolves its handler shape on construction.
- Category registers, overwrites (with a warning) and decorates handlers.
- Registry keeps insertion order and enforces unique names across categories.
- Unknown lookups raise UnknownCommandError with suggestions.
"""
import unittest
from unittest import TestCase

from commander.binder import arguments, Flag
from commander.faults import (
    InvalidHandlerError,
    UnknownCommandError,
    ShadowedCategoryWarning,
    ShadowedCommandWarning,
)
from commander.registry import *
from commander.shapes import Niladic, Structured, Textual


@arguments
class StartArgs:
    quiet: bool = Flag(usage="Start the engine quietly")


def start(context, arguments: StartArgs):
    pass


def stop(context):
    pass


def say(context, text: str):
    pass


class CommandTest(TestCase):

    def testShapes(self) -> None:
        self.assertIsInstance(Command("start", start).shape, Structured)
        self.assertIsInstance(Command("stop", stop).shape, Niladic)
        self.assertIsInstance(Command("say", say).shape, Textual)

    def testFields(self) -> None:
        self.assertEqual([field.name for field in Command("start", start).fields], ["quiet"])
        self.assertEqual(Command("stop", stop).fields, ())

    def testDescr(self) -> None:
        self.assertEqual(Command("stop", stop, "Stops the car engine").descr, "Stops the car engine")
        self.assertIsNone(Command("stop", stop).descr)

    def testCallable(self) -> None:
        calls = []
        command = Command("record", lambda context: calls.append(context))
        command("context")
        self.assertEqual(calls, ["context"])

    def testBadNames(self) -> None:
        for name in ("", "  ", "-start", "two words"):
            with self.assertRaises(ValueError, msg=name):
                Command(name, stop)
        with self.assertRaises(TypeError):
            Command(1, stop)

    def testBadDescr(self) -> None:
        with self.assertRaises(TypeError):
            Command("stop", stop, 1)
        with self.assertRaises(ValueError):
            Command("stop", stop, " ")

    def testInvalidHandlerFailsAtConstruction(self) -> None:
        with self.assertRaises(InvalidHandlerError):
            Command("broken", lambda: None)


class CategoryTest(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()
        self.engine = self.registry.add_category("Engine")

    def testRegister(self) -> None:
        command = self.engine.register(Command("start", start))
        self.assertIn("start", self.engine)
        self.assertIs(self.engine.commands["start"], command)
        self.assertEqual(len(self.engine), 1)

    def testRegisterRequiresCommand(self) -> None:
        with self.assertRaises(TypeError):
            self.engine.register(start)

    def testOverwriteWarns(self) -> None:
        self.engine.register(Command("start", start))
        replacement = Command("start", stop)
        with self.assertWarns(ShadowedCommandWarning):
            self.engine.register(replacement)
        self.assertIs(self.registry.find_command("start"), replacement)
        self.assertEqual(len(self.engine), 1)

    def testReRegisterSameCommandIsSilent(self) -> None:
        command = self.engine.register(Command("start", start))
        self.engine.register(command)
        self.assertEqual(len(self.engine), 1)

    def testDecorator(self) -> None:
        @self.engine.command("start", "Starts the car engine")
        def handler(context, arguments: StartArgs):
            pass

        self.assertIsInstance(handler, Command)
        self.assertEqual(handler.name, "start")
        self.assertEqual(handler.descr, "Starts the car engine")
        self.assertIs(self.registry.find_command("start"), handler)

    def testDecoratorDefaultsToFunctionName(self) -> None:
        @self.engine.command()
        def ignite(context):
            pass

        self.assertEqual(ignite.name, "ignite")

    def testUniqueAcrossCategories(self) -> None:
        self.engine.register(Command("start", start))
        climate = self.registry.add_category("Climate")
        with self.assertRaises(ValueError):
            climate.register(Command("start", stop))
        self.assertNotIn("start", climate)

    def testStandaloneCategory(self) -> None:
        category = Category("Loose")
        category.register(Command("stop", stop))
        with self.assertWarns(ShadowedCommandWarning):
            category.register(Command("stop", stop))


class RegistryTest(TestCase):

    def setUp(self) -> None:
        self.registry = Registry()
        self.engine = self.registry.add_category("Engine")
        self.information = self.registry.add_category("Information")
        self.engine.register(Command("start", start))
        self.engine.register(Command("stop", stop))
        self.information.register(Command("status", stop))

    def testInsertionOrder(self) -> None:
        self.assertEqual([category.name for category in self.registry], ["Engine", "Information"])
        self.assertEqual([command.name for command in self.engine], ["start", "stop"])

    def testFindCommand(self) -> None:
        self.assertEqual(self.registry.find_command("status").name, "status")
        self.assertIn("stop", self.registry)
        self.assertNotIn("fly", self.registry)

    def testFindCategory(self) -> None:
        self.assertIs(self.registry.find_category("stop"), self.engine)
        self.assertIs(self.registry.find_category("status"), self.information)

    def testUnknownCommand(self) -> None:
        with self.assertRaises(UnknownCommandError) as caught:
            self.registry.find_command("strat")
        self.assertEqual(str(caught.exception), "unknown command: strat")
        self.assertEqual(caught.exception.input, "strat")
        self.assertIn("start", caught.exception.suggestions)

    def testLookupIsCaseSensitive(self) -> None:
        with self.assertRaises(UnknownCommandError):
            self.registry.find_command("Start")

    def testReAddCategoryReplacesIt(self) -> None:
        with self.assertWarns(ShadowedCategoryWarning):
            engine = self.registry.add_category("Engine")
        self.assertIsNot(engine, self.engine)
        self.assertEqual(len(self.registry), 2)
        self.assertNotIn("start", self.registry)

    def testReplacedCategoryRejectsCommands(self) -> None:
        with self.assertWarns(ShadowedCategoryWarning):
            self.registry.add_category("Engine")
        self.assertTrue(self.engine.detached)
        with self.assertRaises(ValueError):
            self.engine.register(Command("orphan", stop))
        with self.assertRaises(ValueError):
            @self.engine.command("ignite")
            def ignite(context):
                pass
        self.assertNotIn("orphan", self.engine)
        self.assertNotIn("orphan", self.registry)

    def testCustomTrigger(self) -> None:
        faults = []
        registry = Registry(faults.append)
        registry.add_category("Engine")
        registry.add_category("Engine")
        self.assertEqual(len(faults), 1)
        self.assertIsInstance(faults[0], ShadowedCategoryWarning)


if __name__ == "__main__":
    unittest.main()
