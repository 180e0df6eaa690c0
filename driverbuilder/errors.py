"""Errors raised while turning a build request into a driver build script."""

from __future__ import annotations

from collections.abc import Mapping


class BuildError(Exception):
    """Base error carrying an optional hint and some context for the user."""

    def __init__(self, message: str, *, hint: str | None = None, context: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "error": type(self).__name__,
            "message": self.args[0] if self.args else "",
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ParseError(BuildError):
    pass


class UnsupportedDistroError(BuildError):
    def __init__(self, target: str, supported: list[str] | tuple[str, ...] = ()) -> None:
        super().__init__(
            f"Unsupported target '{target}'.",
            hint="Run 'driverbuilder targets' to list the supported targets.",
            context={"supported": ", ".join(supported)},
        )
        self.target = target


class ResolutionError(BuildError):
    pass


class ArtifactNotFoundError(ResolutionError):
    def __init__(self, role: str, *, kernel_release: str = "", mirrors: tuple[str, ...] = ()) -> None:
        message = f"No '{role}' artifact found"
        if kernel_release:
            message += f" for kernel {kernel_release}"
        super().__init__(
            message + ".",
            hint="Pass the package URLs explicitly with --kernel-url.",
            context={"role": role, "mirrors": ", ".join(mirrors)},
        )
        self.role = role


class InsufficientArtifactsError(ResolutionError):
    def __init__(self, found: int, required: int, *, urls: tuple[str, ...] = ()) -> None:
        super().__init__(
            f"Specific kernel headers not found: {found} of {required} required artifacts are available.",
            context={"urls": ", ".join(urls)},
        )
        self.found = found
        self.required = required


class SynthesisError(BuildError):
    pass


__all__ = [
    "ArtifactNotFoundError",
    "BuildError",
    "InsufficientArtifactsError",
    "ParseError",
    "ResolutionError",
    "SynthesisError",
    "UnsupportedDistroError",
]
