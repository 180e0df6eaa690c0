import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from driverbuilder import config
from driverbuilder.errors import ArtifactNotFoundError
from driverbuilder.main import cli

SCRIPT = "#!/bin/bash\necho build\n"


@patch('driverbuilder.cli_logger.Logger._log')
class TestBuildCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = tempfile.mkdtemp()
        self.script_path = os.path.join(self.test_dir, "build.sh")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _invoke(self, *args):
        return self.runner.invoke(cli, ["--path", self.test_dir, "build", *args])

    @patch('driverbuilder.builder.build_script', return_value=SCRIPT)
    def test_build_to_stdout(self, mock_build_script, mock_log):
        result = self._invoke("debian", "-k", "5.10.0-8-amd64", "--driver-version", "2.0.0",
                              "--module-output", "/tmp/falco.ko")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, SCRIPT)

        target, build_config, kernel_release = mock_build_script.call_args.args
        self.assertEqual(target, "debian")
        self.assertEqual(build_config.driver_version, "2.0.0")
        self.assertEqual(build_config.module_file_path, "/tmp/falco.ko")
        self.assertEqual(kernel_release.kernel_release, "5.10.0-8-amd64")
        self.assertEqual(mock_build_script.call_args.kwargs["timeout"], 30)

    @patch('driverbuilder.builder.build_script', return_value=SCRIPT)
    def test_build_to_file(self, mock_build_script, mock_log):
        result = self._invoke("redhat", "-k", "3.10.0-957.el7.x86_64", "--driver-version", "2.0.0",
                              "-o", self.script_path)
        self.assertEqual(result.exit_code, 0)
        with open(self.script_path) as f:
            self.assertEqual(f.read(), SCRIPT)
        self.assertTrue(os.access(self.script_path, os.X_OK))

    @patch('driverbuilder.builder.build_script', return_value=SCRIPT)
    def test_values_from_config_file(self, mock_build_script, mock_log):
        config.save_config({
            "build": {
                "target": "opensuse",
                "kernelrelease": "5.3.18-lp152.19-default",
                "architecture": "x86_64",
                "driverversion": "2.0.0",
                "probeoutput": "/tmp/falco.o",
                "kernelurls": ["http://x/kernel-default-devel.rpm", "http://x/kernel-devel.rpm"],
            },
            "resolver": {"timeout": 5},
        }, path=self.test_dir)

        result = self._invoke("--driver-version", "2.1.0", "-o", self.script_path)

        self.assertEqual(result.exit_code, 0)
        target, build_config, kernel_release = mock_build_script.call_args.args
        self.assertEqual(target, "opensuse")
        self.assertEqual(build_config.driver_version, "2.1.0")
        self.assertEqual(build_config.probe_file_path, "/tmp/falco.o")
        self.assertEqual(len(build_config.kernel_urls), 2)
        self.assertEqual(str(kernel_release.architecture), "amd64")
        self.assertEqual(mock_build_script.call_args.kwargs["timeout"], 5)

    @patch('driverbuilder.builder.build_script', return_value=SCRIPT)
    def test_values_set_with_config_command(self, mock_build_script, mock_log):
        for key, value in (("build.kernelurls", "http://x/k.rpm"), ("resolver.timeout", "10")):
            result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "set", key, value])
            self.assertEqual(result.exit_code, 0)

        result = self._invoke("redhat", "-k", "3.10.0-957.el7.x86_64", "--driver-version", "2.0.0",
                              "-o", self.script_path)

        self.assertEqual(result.exit_code, 0)
        build_config = mock_build_script.call_args.args[1]
        self.assertEqual(build_config.kernel_urls, ("http://x/k.rpm",))
        self.assertEqual(mock_build_script.call_args.kwargs["timeout"], 10.0)

    @patch('driverbuilder.builder.build_script')
    def test_invalid_configured_timeout(self, mock_build_script, mock_log):
        config.save_config({"resolver": {"timeout": "ten"}}, path=self.test_dir)
        result = self._invoke("debian", "-k", "5.10.0-8-amd64", "--driver-version", "2.0.0")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid 'timeout'", result.output)
        mock_build_script.assert_not_called()

    @patch('driverbuilder.builder.build_script')
    def test_missing_kernelrelease(self, mock_build_script, mock_log):
        result = self._invoke("debian", "--driver-version", "2.0.0")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Missing --kernelrelease", result.output)
        mock_build_script.assert_not_called()

    @patch('driverbuilder.builder.build_script')
    def test_unsupported_architecture(self, mock_build_script, mock_log):
        result = self._invoke("debian", "-k", "5.10.0-8-amd64", "--arch", "riscv64", "--driver-version", "2.0.0")
        self.assertEqual(result.exit_code, 1)
        mock_build_script.assert_not_called()

    @patch('driverbuilder.builder.build_script')
    def test_resolution_failure(self, mock_build_script, mock_log):
        mock_build_script.side_effect = ArtifactNotFoundError("kbuild", kernel_release="5.10.0-8-amd64")
        result = self._invoke("debian", "-k", "5.10.0-8-amd64", "--driver-version", "2.0.0",
                              "-o", self.script_path)
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(os.path.exists(self.script_path))
        logged = " ".join(str(call.args[1]) for call in mock_log.call_args_list if call.args[0] == "ERROR")
        self.assertIn("kbuild", logged)

    def test_unknown_target(self, mock_log):
        result = self._invoke("slackware", "-k", "5.10.0", "--driver-version", "2.0.0")
        self.assertEqual(result.exit_code, 1)


class TestTargetsCommand(unittest.TestCase):

    def test_targets(self):
        result = CliRunner().invoke(cli, ["targets"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.split(), ["debian", "opensuse", "redhat"])

    def test_targets_verbose(self):
        result = CliRunner().invoke(cli, ["targets", "--verbose"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("debian\t(min. 3 kernel packages)", result.output)


class TestVersionCommand(unittest.TestCase):

    @patch('importlib.metadata.version', return_value="0.1.0")
    def test_version(self, mock_version):
        result = CliRunner().invoke(cli, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "driverbuilder 0.1.0")
        mock_version.assert_called_once_with("driverbuilder")

if __name__ == "__main__":
    unittest.main()
