"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Workspace initialization, per-invocation
graph loading, and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pathctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pathctl.config.settings import PathSettings
    from pathctl.infrastructure.loader import ProgressCallback
    from pathctl.infrastructure.workspace import Workspace
    from pathctl.services.result import ServiceResult

type EdgeTriple = tuple[int, int, int]


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The workspace is lazily
    initialized on first use so ``--help`` and ``--version`` never read
    the graph file.
    """

    def __init__(self, settings: PathSettings, edges: tuple[EdgeTriple, ...] = ()) -> None:
        self.settings = settings
        self.edges = edges
        self._workspace: Workspace | None = None

        # Configure structured logging
        from pathctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

        # Enable telemetry context var when verbose
        if settings.verbose:
            from pathctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from pathctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def load_graph(
        self,
        *,
        background: bool = False,
        progress: ProgressCallback | None = None,
    ) -> ServiceResult | None:
        """Fill the workspace from the configured graph file and ``--edge`` options.

        Emits the failure and exits 1 if the file cannot be loaded, if an
        ``--edge`` conflicts, or if there is no graph source at all.

        Returns:
            The load result, or None when the graph came only from ``--edge``.
        """
        from pathctl.services.ingest import IngestService

        svc = IngestService(self.workspace)
        loaded: ServiceResult | None = None

        # --edge alone is a complete graph source
        if self.settings.effective_graph_file is not None or not self.edges:
            loaded = svc.load_configured(background=background, progress=progress)
            if not loaded.ok:
                self.emit(loaded)

        for id_a, id_b, weight in self.edges:
            added = svc.add_edge(id_a, id_b, weight)
            if not added.ok:
                self.emit(added)

        return loaded

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            raise SystemExit(1)
