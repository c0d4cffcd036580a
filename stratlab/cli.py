#!filepath: stratlab/cli.py
from typing import Optional

import pydantic
import typer
from rich import print
from rich.table import Table

from stratlab import __version__, init_logging
from stratlab.config.app_config import AppConfig
from stratlab.strategy.factory import StrategyFactory
from stratlab.utils.errors import StratLabError, UserInputError

app = typer.Typer(help="stratlab backtest CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def strategies():
    """
    列出已注册的 strategy type
    """
    for name in StrategyFactory.names():
        print(name)


@app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config path"),
    seed: Optional[int] = typer.Option(None, "--seed", help="override backtest.seed"),
):
    """
    按配置运行一次回测并打印汇总
    """
    from stratlab.workflows.backtest_workflow import run_backtest_workflow, summarize

    try:
        try:
            cfg = AppConfig.load(config)
        except (FileNotFoundError, pydantic.ValidationError) as e:
            raise UserInputError(str(e)) from e

        if seed is not None:
            cfg.backtest.seed = seed

        init_logging(cfg.log)
        print(f"[green]Running backtest {cfg.backtest.name} on {cfg.data.path}[/green]")

        result = run_backtest_workflow(cfg)
    except (StratLabError, KeyError) as e:
        print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Backtest: {cfg.backtest.name}")
    table.add_column("metric")
    table.add_column("value", justify="right")
    for k, v in summarize(result).items():
        table.add_row(k, f"{v:.4f}" if isinstance(v, float) else str(v))
    print(table)


if __name__ == "__main__":
    app()

# python -m stratlab.cli run --config stratlab/config/base.yml
