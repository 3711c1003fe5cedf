import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from openapi_cli.cli import main
from openapi_cli.config import RequestConfig
from openapi_cli.errors import TransportError

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE = str(FIXTURES / "petstore.yaml")
STORE = str(FIXTURES / "store.json")

CLEAN_ENV = {
    "OPENAPI_BEARER": "",
    "OPENAPI_QUERY_KEY": "",
    "OPENAPI_DEFAULT_HOST": "",
    "OPENAPI_LOG_LEVEL": "WARNING",
}


class TestCliList:
    def test_list_each_file(self):
        runner = CliRunner()
        result = runner.invoke(main, ["list", STORE, STORE], env=CLEAN_ENV)
        assert result.exit_code == 0
        assert result.output.count('"operations"') == 2
        assert '"getOrder"' in result.output

    def test_list_requires_files(self):
        result = CliRunner().invoke(main, ["list"], env=CLEAN_ENV)
        assert result.exit_code != 0

    def test_list_bad_document(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("swagger: '2.0'\n")
        result = CliRunner().invoke(main, ["list", str(bad)], env=CLEAN_ENV)
        assert result.exit_code == 1
        assert "not an OpenAPI 3.x document" in result.output


class TestCliGetSchema:
    def test_prints_schema(self):
        result = CliRunner().invoke(main, ["get-schema", "getOrder", PETSTORE, STORE], env=CLEAN_ENV)
        assert result.exit_code == 0
        schema = json.loads(result.output)
        assert schema["required"] == ["orderId"]

    def test_not_found(self):
        result = CliRunner().invoke(main, ["get-schema", "nope", STORE], env=CLEAN_ENV)
        assert result.exit_code == 1
        assert "operation nope not found in any file" in result.output


class TestCliRun:
    @patch("openapi_cli.cli.run")
    def test_run_prints_response(self, mock_run):
        mock_run.return_value = '{"id": 5}'
        env = {**CLEAN_ENV, "OPENAPI_BEARER": "tok"}
        result = CliRunner().invoke(main, ["run", "getOrder", '{"orderId": 5}', STORE], env=env)

        assert result.exit_code == 0
        assert result.output.strip() == '{"id": 5}'
        operation_id, args, files, config = mock_run.call_args.args
        assert operation_id == "getOrder"
        assert args == '{"orderId": 5}'
        assert [str(f) for f in files] == [STORE]
        assert config == RequestConfig(bearer_token="tok")

    @patch("openapi_cli.cli.run")
    def test_default_host_option(self, mock_run):
        mock_run.return_value = ""
        result = CliRunner().invoke(
            main,
            ["run", "getOrder", "{}", STORE, "--default-host", "http://localhost:9000"],
            env=CLEAN_ENV,
        )
        assert result.exit_code == 0
        assert mock_run.call_args.args[3].default_host == "http://localhost:9000"

    @patch("openapi_cli.cli.run")
    def test_errors_exit_nonzero(self, mock_run):
        mock_run.side_effect = TransportError("failed to make request: boom")
        result = CliRunner().invoke(main, ["run", "getOrder", "{}", STORE], env=CLEAN_ENV)
        assert result.exit_code == 1
        assert "boom" in result.output

    def test_invalid_arguments(self):
        result = CliRunner().invoke(
            main, ["run", "getOrder", '{"orderId": "x"}', STORE], env=CLEAN_ENV
        )
        assert result.exit_code == 1
        assert "invalid arguments for operation getOrder" in result.output
