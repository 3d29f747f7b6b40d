import logging

import click
from botocore.exceptions import BotoCoreError

from gourmand.cli.shell import RecipeShell
from gourmand.core.config import get_settings
from gourmand.core.errors import GourmandError
from gourmand.core.log_config import configure_logging
from gourmand.services.bedrock_client import list_foundation_models
from gourmand.services.client_factory import get_clients
from gourmand.services.conversation import ConversationState, introduce
from gourmand.services.image_generator import NovaCanvasImageGenerator
from gourmand.services.system_prompts import SYSTEM_PROMPT
from gourmand.services.tools import transmit_recipe_tool

logger = logging.getLogger(__name__)


@click.command(name="recipes")
@click.option(
    "--aws-profile",
    default=None,
    help="AWS profile override. Without it, credentials and region come from the "
    "environment, then from the default profile in ~/.aws/config and ~/.aws/credentials.",
)
@click.option("--region", default=None, help="AWS region override.")
@click.option("-v", "--verbose", is_flag=True, help="Log every message sent to Bedrock.")
@click.option(
    "-m",
    "--model",
    default=None,
    help="Model or inference profile id. Some models (Amazon Nova, for example) are only "
    "reachable through a cross-region inference profile such as us.amazon.nova-lite-v1:0.",
)
@click.option("-o", "--output", default=None, help="Output directory for recipe files and photos.")
@click.option("-l", "--list", "list_models", is_flag=True, help="List models enabled for your account.")
@click.option(
    "--backend",
    type=click.Choice(["bedrock", "stub"]),
    default=None,
    help="Inference backend; 'stub' runs offline with canned replies.",
)
@click.version_option(package_name="gourmand")
def main(aws_profile, region, verbose, model, output, list_models, backend) -> None:
    """Get recipe recommendations interactively.

    Callers need permission for bedrock:InvokeModel.

    \b
    Example:
        recipes --aws-profile bedrock -o ~/Desktop -m us.amazon.nova-lite-v1:0
    """
    try:
        settings = get_settings().with_overrides(
            aws_profile=aws_profile,
            aws_region=region,
            verbose=verbose or None,
            model_id=model,
            output_dir=output,
            backend=backend,
        )
    except RuntimeError as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging(settings.verbose)
    try:
        runtime, control = get_clients(settings)
    except BotoCoreError as exc:
        raise click.ClickException(f"Could not create Bedrock clients: {exc}") from exc

    if list_models:
        try:
            models = list_foundation_models(control)
        except GourmandError as exc:
            raise click.ClickException(str(exc)) from exc
        for summary in models:
            click.echo(f"{summary.model_id}  {summary.provider}  {summary.name}")
        return

    tool_config = transmit_recipe_tool()
    logger.debug("tools %s", tool_config)
    state = ConversationState(
        model_id=settings.model_id,
        output_dir=settings.output_dir,
        client=runtime,
        system_prompt=SYSTEM_PROMPT,
        tool_config=tool_config,
        image_generator=NovaCanvasImageGenerator(
            runtime, settings.image_model_id, settings.image_count
        ),
    )

    try:
        introduce(state)
        click.echo()
        RecipeShell(state).cmdloop()
    except GourmandError as exc:
        raise click.ClickException(str(exc)) from exc
    except KeyboardInterrupt:
        click.echo()
