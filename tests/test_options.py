from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from cssdts.errors import OptionsError
from cssdts.exports import ClassEntry, CSSExports
from cssdts.options import GoToDefinition, Options, load_options
from cssdts.transforms import ClassnameTransform


class OptionsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        options = Options.from_dict({})
        self.assertEqual(options, Options())
        self.assertTrue(options.named_exports)
        self.assertIs(options.go_to_definition, GoToDefinition.OFF)

    def test_go_to_definition_values(self) -> None:
        self.assertIs(GoToDefinition.parse(True), GoToDefinition.NAMED)
        self.assertIs(GoToDefinition.parse("named"), GoToDefinition.NAMED)
        self.assertIs(GoToDefinition.parse("default"), GoToDefinition.DEFAULT)
        self.assertIs(GoToDefinition.parse(False), GoToDefinition.OFF)
        with self.assertRaises(OptionsError) as ctx:
            GoToDefinition.parse("sideways")
        self.assertEqual(ctx.exception.code, "OPT003")

    def test_reads_camel_case_keys(self) -> None:
        options = Options.from_dict(
            {
                "classnameTransform": "dashes",
                "goToDefinition": "default",
                "namedExports": False,
                "allowUnknownClassnames": True,
                "noUncheckedIndexedAccess": True,
                "customTemplate": "pkg.mod:fn",
                "rendererOptions": {},
            }
        )
        self.assertIs(options.classname_transform, ClassnameTransform.DASHES)
        self.assertIs(options.go_to_definition, GoToDefinition.DEFAULT)
        self.assertFalse(options.named_exports)
        self.assertTrue(options.allow_unknown_classnames)
        self.assertTrue(options.no_unchecked_indexed_access)
        self.assertEqual(options.custom_template, "pkg.mod:fn")

    def test_rejects_non_boolean_flags(self) -> None:
        with self.assertRaises(OptionsError) as ctx:
            Options.from_dict({"namedExports": "yes"})
        self.assertEqual(ctx.exception.code, "OPT001")

    def test_load_options_from_tsconfig(self) -> None:
        tsconfig = {
            "compilerOptions": {
                "plugins": [
                    {"name": "other-plugin"},
                    {"name": "typescript-plugin-css-modules", "options": {"goToDefinition": True}},
                ]
            }
        }
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tsconfig.json"
            path.write_text(json.dumps(tsconfig), encoding="utf-8")
            options = load_options(path)
        self.assertIs(options.go_to_definition, GoToDefinition.NAMED)

    def test_load_options_missing_file(self) -> None:
        with self.assertRaises(OptionsError) as ctx:
            load_options("/nonexistent/options.json")
        self.assertEqual(ctx.exception.code, "OPT004")


class ExportsTests(unittest.TestCase):
    def test_preserves_insertion_order(self) -> None:
        exports = CSSExports.from_dict({"classes": {"b": "b_1", "a": "a_2"}, "css": ".b_1 {}"})
        self.assertEqual(exports.classes, (ClassEntry("b", "b_1"), ClassEntry("a", "a_2")))
        self.assertEqual(exports.class_names(), ["b", "a"])
        self.assertEqual(list(exports.class_mapping()), ["b", "a"])

    def test_rejects_malformed_classes(self) -> None:
        for payload in [{"classes": ["a"]}, {"classes": {"a": 1}}, {"classes": {}, "css": 3}]:
            with self.subTest(payload=payload):
                with self.assertRaises(OptionsError) as ctx:
                    CSSExports.from_dict(payload)
                self.assertEqual(ctx.exception.code, "OPT010")


if __name__ == "__main__":
    unittest.main()
