"""Save-triggered diagnostics provider bound to one workspace."""

from __future__ import annotations

from typing import Protocol

from elmdiag.make import MakeInvoker, SubprocessMakeInvoker
from elmdiag.pipeline.entrypoints import create_diagnostics
from elmdiag.pipeline.results import FileDiagnostics


class DiagnosticsPublisher(Protocol):
    def publish_diagnostics(self, group: FileDiagnostics) -> None: ...


class MakeDiagnosticsProvider:
    """Runs `elm make` for saved documents of a single workspace.

    Each call is an independent check; concurrent calls share only the
    workspace root and the invoker, neither of which holds per-run state.
    """

    def __init__(
        self,
        workspace_root: str,
        *,
        invoker: MakeInvoker | None = None,
        publisher: DiagnosticsPublisher | None = None,
    ) -> None:
        self.workspace_root = workspace_root
        self.invoker: MakeInvoker = invoker if invoker is not None else SubprocessMakeInvoker()
        self.publisher = publisher

    async def create_diagnostics(self, document_uri: str) -> list[FileDiagnostics]:
        return await create_diagnostics(
            self.invoker,
            workspace_root=self.workspace_root,
            document_uri=document_uri,
        )

    async def on_did_save(self, document_uri: str) -> list[FileDiagnostics]:
        """Check the saved document and publish every file group in order."""
        if self.publisher is None:
            raise ValueError("on_did_save requires a publisher")
        groups = await self.create_diagnostics(document_uri)
        for group in groups:
            self.publisher.publish_diagnostics(group)
        return groups
