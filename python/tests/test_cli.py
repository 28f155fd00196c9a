import io
import os
import tempfile
import unittest


class _Store:
    def __init__(self, check_error=None):
        self.calls = []
        self.checked = False
        self.check_error = check_error

    def check(self):
        self.checked = True
        if self.check_error is not None:
            raise self.check_error

    def set_secret(self, key, value, environment, org=None):
        self.calls.append(("secret", key, value, environment, org))

    def set_variable(self, key, value, environment, org=None):
        self.calls.append(("variable", key, value, environment, org))


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.env_path = os.path.join(self._tmp.name, ".env")
        with open(self.env_path, "w", encoding="utf-8") as f:
            f.write("APP_NAME=demo\nDB_PASSWORD='pw'\nAPP-NAME=x\n")

    def _main(self, argv, variant="secrets", store=None):
        from envpush.cli import main

        out, err = io.StringIO(), io.StringIO()
        store = store if store is not None else _Store()
        code = main(argv, variant=variant, store=store, out=out, err=err, prog="envpush")
        return code, store, out.getvalue(), err.getvalue()

    def test_secrets_variant_end_to_end(self):
        code, store, out, _ = self._main(["-e", "staging", "-f", self.env_path, "--org", "acme"])

        self.assertEqual(code, 0)
        self.assertTrue(store.checked)
        self.assertEqual(
            store.calls,
            [
                ("variable", "APP_NAME", "demo", "staging", "acme"),
                ("secret", "DB_PASSWORD", "pw", "staging", "acme"),
                ("variable", "APP-NAME", "x", "staging", "acme"),
            ],
        )
        self.assertIn("Environment: staging", out)
        self.assertIn("Scope: --org acme", out)
        self.assertIn("SECRET DB_PASSWORD", out)
        self.assertTrue(out.rstrip().endswith("Done."))

    def test_vars_variant_filters(self):
        code, store, out, err = self._main(
            ["--file", self.env_path, "--include", "^APP", "--exclude", "^$"],
            variant="vars",
        )

        self.assertEqual(code, 0)
        self.assertEqual(store.calls, [("variable", "APP_NAME", "demo", "production", None)])
        self.assertIn("Include regex: ^APP", out)
        self.assertIn("Scope: <current repo>", out)
        self.assertIn("APP-NAME", err)

    def test_dry_run_skips_tool_checks_and_store(self):
        from envpush.errors import ExternalToolMissing

        store = _Store(check_error=ExternalToolMissing("gh"))
        code, store, out, _ = self._main(["-n", "-f", self.env_path], store=store)

        self.assertEqual(code, 0)
        self.assertFalse(store.checked)
        self.assertEqual(store.calls, [])
        self.assertIn("[dry-run] gh secret set DB_PASSWORD --env production --body '***2 chars***'", out)
        self.assertIn("Dry-run: 1", out)

    def test_missing_file_exits_1(self):
        code, store, out, err = self._main(["-f", os.path.join(self._tmp.name, "missing.env")])

        self.assertEqual(code, 1)
        self.assertIn("file not found", err)
        self.assertFalse(store.checked)
        self.assertEqual(out, "")

    def test_missing_tool_exits_1(self):
        from envpush.errors import ExternalToolMissing

        code, store, _, err = self._main(["-f", self.env_path], store=_Store(check_error=ExternalToolMissing("gh")))
        self.assertEqual(code, 1)
        self.assertIn("not found in PATH", err)
        self.assertEqual(store.calls, [])

    def test_unauthenticated_tool_exits_1(self):
        from envpush.errors import ExternalToolUnauthenticated

        code, store, _, err = self._main(
            ["-f", self.env_path], store=_Store(check_error=ExternalToolUnauthenticated("gh"))
        )
        self.assertEqual(code, 1)
        self.assertIn("gh auth login", err)
        self.assertEqual(store.calls, [])

    def test_unknown_flag_exits_1_with_usage(self):
        code, store, _, err = self._main(["--bogus"])
        self.assertEqual(code, 1)
        self.assertIn("usage:", err)
        self.assertEqual(store.calls, [])

    def test_include_flag_unknown_in_secrets_variant(self):
        code, _, _, _ = self._main(["-i", "^APP"])
        self.assertEqual(code, 1)

    def test_invalid_regex_exits_1(self):
        code, _, _, err = self._main(["-i", "("], variant="vars")
        self.assertEqual(code, 1)
        self.assertIn("invalid regex", err)

    def test_help_exits_0(self):
        code, store, out, err = self._main(["--help"], variant="vars")
        self.assertEqual(code, 0)
        self.assertIn("--exclude", out)
        self.assertIn("examples:", out)
        self.assertEqual(err, "")
        self.assertFalse(store.checked)

    def test_store_failure_propagates_exit_status(self):
        from envpush.errors import StoreCommandFailed

        class _Failing(_Store):
            def set_secret(self, key, value, environment, org=None):
                raise StoreCommandFailed(key, 3)

        code, store, out, err = self._main(["-f", self.env_path], store=_Failing())
        self.assertEqual(code, 3)
        self.assertIn("DB_PASSWORD", err)
        self.assertEqual(store.calls, [("variable", "APP_NAME", "demo", "production", None)])
        self.assertNotIn("Done.", out)


class CliInputFileTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write(self, data):
        path = os.path.join(self._tmp.name, ".env")
        with open(path, "wb") as f:
            f.write(data)
        return path

    def _main(self, argv, store):
        from envpush.cli import main

        out, err = io.StringIO(), io.StringIO()
        code = main(argv, store=store, out=out, err=err, prog="envpush")
        return code, out.getvalue(), err.getvalue()

    def test_non_utf8_file_exits_1_before_banner(self):
        store = _Store()
        code, out, err = self._main(["-f", self._write(b"A=1\nB=\xff\n")], store)

        self.assertEqual(code, 1)
        self.assertIn("cannot read", err)
        self.assertNotIn("Environment:", out)
        self.assertFalse(store.checked)
        self.assertEqual(store.calls, [])

    def test_empty_key_warning_hides_value(self):
        store = _Store()
        code, out, err = self._main(["-f", self._write(b"=ghp_SUPERSECRET\nA=1\n")], store)

        self.assertEqual(code, 0)
        self.assertIn("line 1", err)
        self.assertIn("empty key", err)
        self.assertNotIn("ghp_SUPERSECRET", err)
        self.assertNotIn("ghp_SUPERSECRET", out)
        self.assertEqual(store.calls, [("variable", "A", "1", "production", None)])

    def test_killed_store_command_exits_1(self):
        from envpush.errors import StoreCommandFailed

        class _Killed(_Store):
            def set_variable(self, key, value, environment, org=None):
                raise StoreCommandFailed(key, -9)

        code, _, err = self._main(["-f", self._write(b"A=1\n")], _Killed())
        self.assertEqual(code, 1)
        self.assertIn("exit -9", err)


class ModuleEntryTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.env_path = os.path.join(self._tmp.name, ".env")
        with open(self.env_path, "w", encoding="utf-8") as f:
            f.write("APP_NAME=demo\nDB_PASSWORD=pw\n")

    def _run(self, argv, store=None):
        from envpush.cli import main_module

        out, err = io.StringIO(), io.StringIO()
        store = store if store is not None else _Store()
        code = main_module(argv, store=store, out=out, err=err)
        return code, store, out.getvalue(), err.getvalue()

    def test_selects_secrets_variant(self):
        code, store, out, _ = self._run(["secrets", "-f", self.env_path])
        self.assertEqual(code, 0)
        self.assertEqual([c[0] for c in store.calls], ["variable", "secret"])
        self.assertNotIn("Include regex", out)

    def test_selects_vars_variant(self):
        code, store, out, _ = self._run(["vars", "-f", self.env_path, "-x", "PASSWORD"])
        self.assertEqual(code, 0)
        self.assertEqual(store.calls, [("variable", "APP_NAME", "demo", "production", None)])
        self.assertIn("Exclude regex: PASSWORD", out)

    def test_missing_variant_exits_1(self):
        code, store, out, err = self._run([])
        self.assertEqual(code, 1)
        self.assertIn("usage: python -m envpush", err)
        self.assertEqual(out, "")
        self.assertEqual(store.calls, [])

    def test_unknown_variant_exits_1(self):
        code, _, _, err = self._run(["both", "-f", self.env_path])
        self.assertEqual(code, 1)
        self.assertIn("unknown variant: both", err)

    def test_help_lists_variants_on_stdout(self):
        code, _, out, err = self._run(["--help"])
        self.assertEqual(code, 0)
        self.assertIn("secrets", out)
        self.assertIn("vars", out)
        self.assertEqual(err, "")

    def test_variant_help_uses_module_prog(self):
        code, _, out, _ = self._run(["vars", "-h"])
        self.assertEqual(code, 0)
        self.assertIn("python -m envpush vars", out)
        self.assertIn("--include", out)


if __name__ == "__main__":
    unittest.main()
