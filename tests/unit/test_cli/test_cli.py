import importlib
import io
import logging
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import Mock, PropertyMock, patch

import structlog
from botocore.exceptions import ClientError

from glue_catalog_docs import cli
from glue_catalog_docs.common.exceptions import CatalogError, OutputError
from glue_catalog_docs.common.utils.config import AppConfig
from glue_catalog_docs.generator import CatalogDocumentationGenerator


class TestArgumentParser(unittest.TestCase):

    def test_defaults_are_unset(self):
        """Test that unset flags do not override other configuration sources"""
        args = cli.build_parser().parse_args([])
        self.assertIsNone(args.project_name)
        self.assertIsNone(args.output_dir)
        self.assertIsNone(args.database_name)

    def test_camel_case_aliases(self):
        """Test that the camelCase flag spellings are accepted"""
        args = cli.build_parser().parse_args(
            ["--projectName", "Lake", "--outputDir", "out", "--databaseName", "sales"]
        )
        self.assertEqual((args.project_name, args.output_dir, args.database_name),
                         ("Lake", "out", "sales"))

    def test_invalid_log_format(self):
        with self.assertRaises(SystemExit):
            cli.build_parser().parse_args(["--log-format", "xml"])


@patch.dict(os.environ, {}, clear=True)
class TestMain(unittest.TestCase):
    """Unit tests for the CLI entry point"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root_handlers = logging.getLogger().handlers[:]

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in self.root_handlers:
            root.addHandler(handler)

    @patch("glue_catalog_docs.cli.create_generator")
    def test_success(self, mock_create):
        """Test a successful run returns 0 and documents the requested database"""
        generator = mock_create.return_value
        generator.run.return_value = []

        code = cli.main(["--database-name", "sales", "--output-dir", self.temp_dir,
                         "--project-name", "Lake", "--log-level", "ERROR"])

        self.assertEqual(code, cli.EXIT_OK)
        config = mock_create.call_args.args[0]
        self.assertIsInstance(config, AppConfig)
        self.assertEqual(config.database_name, "sales")
        self.assertEqual(config.project_name, "Lake")
        self.assertEqual(config.output_dir, self.temp_dir)
        generator.run.assert_called_once_with("sales")

    @patch("glue_catalog_docs.cli.create_generator")
    def test_catalog_error_exits_1(self, mock_create):
        mock_create.return_value.run.side_effect = CatalogError("denied")
        self.assertEqual(cli.main(["--log-level", "ERROR"]), cli.EXIT_ERROR)

    @patch("glue_catalog_docs.cli.create_generator")
    def test_output_error_exits_1(self, mock_create):
        mock_create.return_value.run.side_effect = OutputError("read-only", path="/x")
        self.assertEqual(cli.main(["--log-level", "ERROR"]), cli.EXIT_ERROR)

    @patch("glue_catalog_docs.cli.create_generator")
    def test_interrupt_exits_130(self, mock_create):
        mock_create.return_value.run.side_effect = KeyboardInterrupt()
        self.assertEqual(cli.main(["--log-level", "ERROR"]), cli.EXIT_INTERRUPTED)

    @patch("glue_catalog_docs.cli.create_generator")
    def test_configuration_error_exits_1(self, mock_create):
        code = cli.main(["--config", os.path.join(self.temp_dir, "missing.yaml")])

        self.assertEqual(code, cli.EXIT_ERROR)
        mock_create.assert_not_called()

    @patch("glue_catalog_docs.cli.create_generator")
    def test_invalid_page_size_exits_1(self, mock_create):
        self.assertEqual(cli.main(["--page-size", "0"]), cli.EXIT_ERROR)
        mock_create.assert_not_called()

    @patch("glue_catalog_docs.cli.create_generator")
    def test_config_file_used(self, mock_create):
        """Test that values from --config reach the generator"""
        path = os.path.join(self.temp_dir, "docs.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write("database_name: analytics\nlog_level: ERROR\n")
        mock_create.return_value.run.return_value = []

        self.assertEqual(cli.main(["--config", path]), cli.EXIT_OK)
        mock_create.return_value.run.assert_called_once_with("analytics")

    @patch("glue_catalog_docs.cli.GlueConnectionManager")
    def test_end_to_end_with_stubbed_client(self, mock_connection_cls):
        """Test the full wiring with a fake Glue client"""
        glue_client = Mock()
        glue_client.search_tables.return_value = {
            "TableList": [{"Name": "orders", "DatabaseName": "sales",
                           "StorageDescriptor": {"Columns": [{"Name": "id", "Type": "int"}]}}]
        }
        mock_connection_cls.return_value.glue_client = glue_client
        output_dir = os.path.join(self.temp_dir, "docs")

        code = cli.main(["--databaseName", "sales", "--outputDir", output_dir,
                         "--catalog-id", "123456789012", "--log-level", "ERROR"])

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(sorted(os.listdir(output_dir)), ["README.md", "orders.md"])
        _, kwargs = glue_client.search_tables.call_args
        self.assertEqual(kwargs["CatalogId"], "123456789012")

    @patch("glue_catalog_docs.cli.GlueConnectionManager")
    def test_stdout_stays_clean(self, mock_connection_cls):
        """Test that no log line reaches stdout, including events logged while loading config"""
        glue_client = Mock()
        glue_client.search_tables.return_value = {"TableList": []}
        mock_connection_cls.return_value.glue_client = glue_client
        structlog.reset_defaults()

        stdout, stderr = io.StringIO(), io.StringIO()
        with patch("sys.stdout", stdout), patch("sys.stderr", stderr):
            code = cli.main(["--output-dir", os.path.join(self.temp_dir, "docs"),
                             "--log-level", "ERROR"])

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout.getvalue(), "")
        self.assertNotIn("Configuration loaded", stderr.getvalue())

    @patch("glue_catalog_docs.cli.create_generator")
    def test_debug_level_logs_to_stderr(self, mock_create):
        mock_create.return_value.run.return_value = []
        structlog.reset_defaults()

        stdout, stderr = io.StringIO(), io.StringIO()
        with patch("sys.stdout", stdout), patch("sys.stderr", stderr):
            code = cli.main(["--log-level", "DEBUG"])

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("Configuration loaded", stderr.getvalue())

    @patch("glue_catalog_docs.cli.GlueConnectionManager")
    def test_api_error_end_to_end(self, mock_connection_cls):
        glue_client = Mock()
        glue_client.search_tables.side_effect = ClientError(
            {"Error": {"Code": "EntityNotFoundException", "Message": "no db"}}, "SearchTables"
        )
        mock_connection_cls.return_value.glue_client = glue_client

        code = cli.main(["--output-dir", os.path.join(self.temp_dir, "docs"),
                         "--log-level", "ERROR"])
        self.assertEqual(code, cli.EXIT_ERROR)


class TestCreateGenerator(unittest.TestCase):

    @patch("glue_catalog_docs.cli.GlueConnectionManager")
    def test_wiring(self, mock_connection_cls):
        config = AppConfig(database_name="sales", output_dir="out", project_name="Lake",
                           catalog_id="123456789012", page_size=200)

        generator = cli.create_generator(config)

        self.assertIsInstance(generator, CatalogDocumentationGenerator)
        self.assertEqual(generator.project_name, "Lake")
        self.assertEqual(str(generator.output_dir), "out")
        self.assertEqual(generator.catalog.catalog_id, "123456789012")
        self.assertEqual(generator.catalog.page_size, 200)
        self.assertIs(generator.catalog.glue_client, mock_connection_cls.return_value.glue_client)
        mock_connection_cls.assert_called_once_with(config.connection_settings())

    @patch("glue_catalog_docs.cli.GlueConnectionManager")
    def test_connection_failure(self, mock_connection_cls):
        type(mock_connection_cls.return_value).glue_client = PropertyMock(
            side_effect=ConnectionError("no region")
        )
        with self.assertRaises(CatalogError):
            cli.create_generator(AppConfig())


class TestModuleEntryPoint(unittest.TestCase):

    @patch("glue_catalog_docs.cli.run")
    def test_import_does_not_run_cli(self, mock_run):
        sys.modules.pop("glue_catalog_docs.__main__", None)
        try:
            importlib.import_module("glue_catalog_docs.__main__")
        finally:
            sys.modules.pop("glue_catalog_docs.__main__", None)
        mock_run.assert_not_called()


if __name__ == '__main__':
    unittest.main()
