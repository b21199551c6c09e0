"""Build command implementation."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epubmaker.core.package_assembler import BuildResult, PackageAssembler
from epubmaker.models.config import BuildConfig


def execute_build(config: BuildConfig, console: Console, quiet: bool = False) -> BuildResult:
    """Execute the build command."""
    if quiet:
        result = PackageAssembler(config).build()
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Starting...", total=None)
            assembler = PackageAssembler(
                config,
                on_step=lambda message: progress.update(task, description=message),
            )
            result = assembler.build()

    if quiet:
        return result

    summary_lines = [
        f"[bold]{escape(result.metadata.title)}[/]",
        f"[dim]Author:[/] {escape(result.metadata.author or 'Unknown')}",
        f"[dim]Identifier:[/] {result.metadata.identifier}",
        "",
        f"[dim]Manifest items:[/] {len(result.manifest)}",
        f"[dim]Pages:[/] {len(result.spine)}",
    ]
    if config.viewport is not None:
        summary_lines.append(
            f"[dim]Adapted images:[/] {len(result.adapted)} (viewport {config.viewport})"
        )
    if result.skipped:
        summary_lines.append("")
        summary_lines.append(
            f"[yellow]Skipped {len(result.skipped)} unrecognized file(s): "
            f"{escape(', '.join(result.skipped))}[/]"
        )
    summary_lines.append("")
    summary_lines.append(f"[dim]Output:[/] {escape(str(result.output_path))}")

    console.print(
        Panel(
            "\n".join(summary_lines),
            title="Complete",
            border_style="green",
        )
    )
    return result
