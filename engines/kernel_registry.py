"""Immutable name -> kernel registry."""

from types import MappingProxyType
from typing import Iterable, Iterator, Tuple

from models.errors import KernelNotFound
from models.kernel import Kernel, PostProcess
from utils.constants import KERNEL_WEIGHTS, BIAS_SCALE_KERNELS


class KernelRegistry:
    """Read-only kernel lookup; extend with with_kernel() to get a new registry."""

    def __init__(self, kernels: Iterable[Kernel] = ()):
        table = {}
        for kernel in kernels:
            table[kernel.name] = kernel
        self._kernels = MappingProxyType(table)

    def get(self, name: str) -> Kernel:
        try:
            return self._kernels[name]
        except (KeyError, TypeError):
            raise KernelNotFound(name) from None

    def with_kernel(self, kernel: Kernel) -> 'KernelRegistry':
        """Copy of this registry with `kernel` added or replaced."""
        return KernelRegistry(list(self._kernels.values()) + [kernel])

    def names(self) -> Tuple[str, ...]:
        return tuple(self._kernels)

    def __contains__(self, name) -> bool:
        return name in self._kernels

    def __iter__(self) -> Iterator[str]:
        return iter(self._kernels)

    def __len__(self) -> int:
        return len(self._kernels)

    def __repr__(self):
        return f"KernelRegistry({list(self._kernels)})"


def build_default_registry() -> KernelRegistry:
    return KernelRegistry(
        Kernel(
            name,
            weights,
            PostProcess.BIAS_SCALE if name in BIAS_SCALE_KERNELS else PostProcess.CLAMP
        )
        for name, weights in KERNEL_WEIGHTS.items()
    )


DEFAULT_REGISTRY = build_default_registry()
