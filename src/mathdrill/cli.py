"""CLI entry point for mathdrill."""

import logging
import sys

import click

from mathdrill.engine.tiers import DifficultyTier

TIER_NAMES = [tier.value for tier in DifficultyTier]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log engine decisions to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """mathdrill — adaptive arithmetic practice engine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )


@main.command()
def serve() -> None:
    """Run the JSON-lines event bridge on stdin/stdout."""
    import asyncio

    from mathdrill.server.__main__ import main as serve_main

    logging.getLogger("mathdrill.server").setLevel(logging.INFO)
    asyncio.run(serve_main())


@main.command()
@click.option("--tier", type=click.Choice(TIER_NAMES), default="beginner", show_default=True)
@click.option("--count", "-n", type=click.IntRange(min=1), default=10, show_default=True)
@click.option("--easy", is_flag=True, help="Use confidence-building easy patterns")
@click.option("--seed", type=int, default=None, help="Seed the random source")
def problems(tier: str, count: int, easy: bool, seed: int) -> None:
    """Print sample problems for a tier."""
    from mathdrill.engine.generator import ProblemGenerator

    generator = ProblemGenerator(seed=seed)
    difficulty = DifficultyTier(tier)
    for _ in range(count):
        problem = generator.generate(difficulty, force_easy=easy)
        click.echo(f"  {problem.display_text}{problem.correct_result}")


@main.command()
def tiers() -> None:
    """List difficulty tiers."""
    for tier in DifficultyTier:
        policy = tier.policy
        low, high = policy.number_range
        symbols = " ".join(op.symbol for op in policy.operations)
        click.echo(
            f"  {tier.value}: {policy.display_name} "
            f"(range {low}-{high}, ops {symbols}, {policy.base_score} pts)"
        )
