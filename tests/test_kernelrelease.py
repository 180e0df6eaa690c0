import dataclasses
import unittest
from driverbuilder.errors import ParseError
from driverbuilder.kernelrelease import Architecture, KernelRelease, parse_kernel_release

class TestKernelRelease(unittest.TestCase):

    def test_parse_debian_release(self):
        kr = parse_kernel_release("5.10.0-8-amd64", "amd64")
        self.assertEqual(kr, KernelRelease(5, 10, 0, "-8-amd64", Architecture.AMD64))
        self.assertEqual(kr.fullversion, "5.10.0")
        self.assertEqual(kr.extraversion, "8")
        self.assertEqual(kr.kernel_release, "5.10.0-8-amd64")

    def test_parse_is_deterministic(self):
        self.assertEqual(parse_kernel_release("4.19.0-6-cloud-amd64"), parse_kernel_release("4.19.0-6-cloud-amd64"))

    def test_distro_markers_stay_in_extraversion(self):
        kr = parse_kernel_release("4.19.0-6-cloud-amd64")
        self.assertEqual((kr.version, kr.patchlevel, kr.sublevel), (4, 19, 0))
        self.assertEqual(kr.full_extraversion, "-6-cloud-amd64")

        kr = parse_kernel_release("3.10.0-957.el7.x86_64", "x86_64")
        self.assertEqual(kr.full_extraversion, "-957.el7.x86_64")
        self.assertEqual(kr.extraversion, "957")
        self.assertEqual(kr.architecture, Architecture.AMD64)

    def test_parse_without_extraversion(self):
        kr = parse_kernel_release("5.4.0")
        self.assertEqual(kr.full_extraversion, "")
        self.assertEqual(kr.extraversion, "")
        self.assertEqual(kr.kernel_release, "5.4.0")

    def test_architecture_aliases(self):
        self.assertEqual(parse_kernel_release("5.4.0", "aarch64").architecture, Architecture.ARM64)
        self.assertEqual(str(Architecture.ARM64), "arm64")
        self.assertEqual(Architecture.AMD64.to_rpm(), "x86_64")
        self.assertEqual(Architecture.ARM64.to_rpm(), "aarch64")

    def test_invalid_release(self):
        for release in ("5.10", "linux-5.10.0", "", "5.x.0-1", "5.10.0-1;id", "5.10.0-1 $(id)"):
            with self.subTest(release=release):
                with self.assertRaises(ParseError):
                    parse_kernel_release(release)

    def test_invalid_architecture(self):
        with self.assertRaises(ParseError) as cm:
            parse_kernel_release("5.10.0-8-amd64", "mips")
        self.assertIn("mips", str(cm.exception))

    def test_kernel_release_is_immutable(self):
        kr = parse_kernel_release("5.10.0-8-amd64")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            kr.version = 6

if __name__ == '__main__':
    unittest.main()
