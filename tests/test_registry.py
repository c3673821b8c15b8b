import unittest
from concurrent.futures import ThreadPoolExecutor, as_completed

import tests.test_registry_helpers as helpers
from swine.inject import Deferred, config, construct, function, self_tag
from swine.metadata import FactoryMetadata
from swine.registry import initialize


class RegistryTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = initialize()

    def test_empty(self) -> None:
        self.assertEqual(0, len(self.registry))
        self.assertNotIn(helpers.Labeled, self.registry)
        self.assertIsNone(self.registry.resolve(helpers.Labeled))
        self.assertIsNone(self.registry.resolve(helpers.Labeled, "a"))
        with self.assertRaises(KeyError):
            self.registry[helpers.Labeled]  # pylint: disable=pointless-statement
        with self.assertRaises(KeyError):
            self.registry.require(helpers.Labeled, "a")

    def test_zero_argument_factory(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)

        self.assertIn(helpers.Labeled, self.registry)
        self.assertIn((helpers.Labeled, 0), self.registry)
        self.assertNotIn((helpers.Labeled, 1), self.registry)

        widget = self.registry.resolve(helpers.Labeled)
        self.assertIsInstance(widget, helpers.Widget)
        self.assertEqual("unlabeled", widget.label)

    def test_one_argument_factory(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_labeled_widget)

        widget = self.registry.resolve(helpers.Labeled, "hello")
        self.assertEqual("hello", widget.label)
        # only the one-argument shape is registered
        self.assertIsNone(self.registry.resolve(helpers.Labeled))

    def test_arity_keys_are_independent(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)
        self.registry.register(helpers.Labeled, helpers.make_labeled_widget)
        self.registry.register(helpers.Labeled, helpers.make_pair)

        self.assertEqual(3, len(self.registry))
        self.assertEqual("unlabeled", self.registry[helpers.Labeled].label)
        self.assertEqual("x", self.registry.require(helpers.Labeled, "x").label)
        self.assertEqual(("x", "y"), self.registry.require(helpers.Labeled, "x", "y"))

    def test_fresh_instance_per_resolution(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)

        first = self.registry[helpers.Labeled]
        second = self.registry[helpers.Labeled]
        self.assertIsNot(first, second)

    def test_last_registration_wins(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)
        self.registry.register(helpers.Labeled, lambda r: helpers.Widget("replacement"))

        self.assertEqual(1, len(self.registry))
        self.assertEqual("replacement", self.registry[helpers.Labeled].label)

    def test_interfaces_are_independent(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)

        self.assertNotIn(helpers.Other, self.registry)
        self.assertIsNone(self.registry.resolve(helpers.Other))

    def test_factory_receives_registry(self) -> None:
        self.registry.register(helpers.Other, lambda r: r)
        self.assertIs(self.registry, self.registry[helpers.Other])

    def test_explicit_arity(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_any, arity=2)

        self.assertEqual(("a", "b"), self.registry.require(helpers.Labeled, "a", "b"))
        self.assertIsNone(self.registry.resolve(helpers.Labeled, "a"))

    def test_variadic_factory_needs_arity(self) -> None:
        with self.assertRaises(TypeError):
            self.registry.register(helpers.Labeled, helpers.make_any)
        self.assertEqual(0, len(self.registry))

    def test_factory_without_resolver_param(self) -> None:
        with self.assertRaises(TypeError):
            self.registry.register(helpers.Labeled, lambda: helpers.Widget())

    def test_negative_arity(self) -> None:
        with self.assertRaises(ValueError):
            self.registry.register(helpers.Labeled, helpers.make_any, arity=-1)

    def test_invalid_contains_key(self) -> None:
        with self.assertRaises(KeyError):
            "Labeled" in self.registry  # pylint: disable=expression-not-assigned

    def test_config(self) -> None:
        registry = initialize({"LABEL": "from config"})
        self.assertIn("LABEL", registry.config)
        self.assertEqual("from config", registry.config["LABEL"])
        self.assertIsNone(registry.config.get("MISSING"))
        with self.assertRaises(KeyError):
            registry.config["MISSING"]  # pylint: disable=pointless-statement

    def test_construct_resolves_bindings(self) -> None:
        registry = initialize({"LABEL": "from config"})
        registry.register(helpers.Labeled, lambda r: construct(r, helpers.ConfiguredWidget))

        widget = registry[helpers.Labeled]
        self.assertIsInstance(widget, helpers.ConfiguredWidget)
        self.assertEqual("from config", widget.label)

        self.assertEqual("from default", construct(self.registry, helpers.ConfiguredWidget).label)

    def test_construct_kwargs_override_bindings(self) -> None:
        widget = construct(self.registry, helpers.ConfiguredWidget, label="explicit")
        self.assertEqual("explicit", widget.label)

    def test_construct_self_tag(self) -> None:
        aware = construct(self.registry, helpers.RegistryAware, "aware")
        self.assertEqual("aware", aware.name)
        self.assertIs(self.registry, aware.registry_impl)

    def test_construct_unbound_class(self) -> None:
        widget = construct(self.registry, helpers.Widget, "plain")
        self.assertEqual("plain", widget.label)

    def test_config_deferred(self) -> None:
        registry = initialize({"EXISTS": "exists"})
        self.assertEqual("exists", config("EXISTS").resolve(registry))
        self.assertIsNone(config("DNE", None).resolve(registry))
        with self.assertRaises(KeyError):
            config("DNE").resolve(registry)

        temp = config("EXISTS")
        self.assertIsInstance(temp, Deferred)
        self.assertEqual("config(EXISTS)", str(temp))

    def test_config_present_none(self) -> None:
        registry = initialize({"NONE": None})
        self.assertIsNone(config("NONE").resolve(registry))
        self.assertIsNone(config("NONE", default="fallback").resolve(registry))

    def test_resolve_non_class_key(self) -> None:
        self.registry.register(helpers.Labeled, helpers.make_widget)
        self.assertIsNone(self.registry.resolve("Labeled"))
        self.assertIsNone(self.registry.resolve("Labeled", "x"))
        with self.assertRaises(KeyError):
            self.registry.require("Labeled")

    def test_function_deferred(self) -> None:
        registry = initialize({"A": 1})
        deferred = function(helpers.passthrough, config("A"), 2, b=self_tag)
        self.assertEqual(((1, 2), {"b": registry}), deferred.resolve(registry))
        self.assertEqual("passthrough(config(A), 2, b=self)", str(deferred))

    def test_metadata(self) -> None:
        meta = FactoryMetadata(helpers.Labeled, helpers.make_labeled_widget)
        self.assertEqual(1, meta.arity)
        self.assertEqual((helpers.Labeled, 1), meta.key)
        self.assertEqual(meta, FactoryMetadata(helpers.Labeled, helpers.make_pair, arity=1))
        self.assertNotEqual(meta, FactoryMetadata(helpers.Labeled, helpers.make_widget))
        self.assertEqual("Labeled/1", str(meta))
        with self.assertRaises(TypeError):
            meta._call(self.registry)

    def test_concurrent_registration(self) -> None:
        classes = [type(f"Iface{i}", (), {}) for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(self.registry.register, cls, helpers.make_widget)
                for cls in classes
            ]
            for future in as_completed(futures):
                future.result()

        self.assertEqual(50, len(self.registry))
        for cls in classes:
            self.assertIsInstance(self.registry[cls], helpers.Widget)


if __name__ == "__main__":
    unittest.main()
