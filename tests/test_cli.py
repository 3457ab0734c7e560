from __future__ import annotations

import json
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]

SOURCE_MAP = {"version": 3, "sources": ["styles.scss"], "names": [], "mappings": ";;CAIA"}


def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, '-m', 'cssdts.cli', *args],
        cwd=PROJECT_ROOT,
        text=True,
        capture_output=True,
        check=False,
    )


class CLITests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.exports = self.tmp / 'exports.json'
        self.exports.write_text(json.dumps({'foo': 'foo', 'bar-baz': 'bar-baz'}), encoding='utf-8')
        self.css = self.tmp / 'styles.module.css'
        self.css.write_text('/* header */\n\n.foo { color: red }\n\n\n\n', encoding='utf-8')
        self.source_map = self.tmp / 'styles.module.css.map'
        self.source_map.write_text(json.dumps(SOURCE_MAP), encoding='utf-8')

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_generate_to_stdout(self) -> None:
        result = run_cli('generate', str(self.exports))
        self.assertEqual(result.returncode, 0)
        self.assertIn("  'bar-baz': string;", result.stdout)
        self.assertIn('export let foo: string;', result.stdout)

    def test_generate_writes_next_to_css(self) -> None:
        result = run_cli(
            'generate',
            str(self.exports),
            '--css',
            str(self.css),
            '--source-map',
            str(self.source_map),
            '--go-to-definition',
            'named',
        )
        self.assertEqual(result.returncode, 0, result.stderr)
        target = self.tmp / 'styles.module.css.d.ts'
        self.assertEqual(result.stdout.strip(), str(target))
        lines = target.read_text(encoding='utf-8').split('\n')
        self.assertEqual(lines[4], 'export let foo: string;')

    def test_generate_with_options_file(self) -> None:
        options = self.tmp / 'options.json'
        options.write_text(json.dumps({'classnameTransform': 'camelCaseOnly', 'namedExports': False}), encoding='utf-8')
        result = run_cli('generate', str(self.exports), '--options', str(options), '--stdout')
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertIn("  'barBaz': string;", result.stdout)
        self.assertNotIn('export let', result.stdout)

    def test_missing_source_map_exit_code(self) -> None:
        result = run_cli('generate', str(self.exports), '--go-to-definition', 'default')
        self.assertEqual(result.returncode, 1)
        self.assertIn('GEN001', result.stderr)

    def test_locate_json(self) -> None:
        result = run_cli('locate', str(self.exports), '--css', str(self.css), '--source-map', str(self.source_map))
        self.assertEqual(result.returncode, 0, result.stderr)
        payload = json.loads(result.stdout)
        self.assertEqual(payload['classes'][0]['outputLine'], 4)
        self.assertEqual(payload['classes'][1]['outputLine'], 0)


if __name__ == '__main__':
    unittest.main()
