import asyncio
import logging
from collections import deque

import discord
from discord.ext import commands

from config.config import Config
from games.countdown import InvalidInputError, SearchOutcome, format_outcome, parse_solve_args
from games.rpn import EvaluationError, RpnEvaluator
from games.solver import CountdownSolver
from utils.helpers import send_chunked_message

logger = logging.getLogger(__name__)


class CountdownBot(commands.Bot):
    def __init__(self, config: Config):
        intents = discord.Intents.default()
        intents.message_content = True  # Needed to read command arguments

        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.owner_id = int(config.owner_id) if config.owner_id else None
        self.solver = CountdownSolver(timeout=config.solver.timeout_seconds)
        self.evaluator = RpnEvaluator()

        # Message deduplication buffer
        self.processed_messages = deque(maxlen=100)

        # Command handlers dictionary
        self.command_handlers = {
            'solve': self._handle_solve,
            'rpn': self._handle_rpn,
            'shutdown': self._handle_shutdown,
        }

    async def setup_hook(self):
        """This is called when the bot is ready to start"""
        self.add_commands()

    async def on_ready(self):
        logger.info("Logged in as %s (ID: %s)", self.user, self.user.id)
        await self.change_presence(
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name="for !solve <target> <numbers>"
            )
        )

    def add_commands(self):
        """Register commands using the command handlers dictionary"""
        for cmd_name, handler in self.command_handlers.items():
            # Create a closure that properly captures the handler
            def make_callback(h):
                async def callback(ctx, *, arg=None):
                    if arg is None:
                        await h(ctx)
                    else:
                        await h(ctx, arg)
                return callback

            cmd = commands.Command(make_callback(handler), name=cmd_name)
            self.add_command(cmd)

        logger.info("Registered commands: %s", ', '.join(c.name for c in self.commands))

    async def _handle_solve(self, ctx, args=None):
        """Handle the solve command: !solve <target> <n1> <n2> ..."""
        try:
            request = parse_solve_args(args, max_matches=self.config.solver.max_matches)
        except InvalidInputError as e:
            outcome = SearchOutcome.invalid(str(e))
            await ctx.send(format_outcome(None, outcome))
            return

        async with ctx.typing():
            # The search is CPU bound; keep the event loop responsive.
            outcome = await asyncio.to_thread(self.solver.run, request)

        message = format_outcome(request, outcome, limit=self.config.solver.reply_limit)
        await send_chunked_message(ctx.channel, message, reference=ctx.message)

    async def _handle_rpn(self, ctx, expression=None):
        """Handle the rpn command: evaluate a postfix expression"""
        if not expression:
            await ctx.send("Usage: !rpn <postfix expression>, e.g. `!rpn 25 50 + 3 *`")
            return

        try:
            value = self.evaluator.evaluate(expression)
            infix = self.evaluator.to_infix(expression)
        except EvaluationError as e:
            await ctx.send(f"Cannot evaluate `{expression}`: {e}")
            return

        await ctx.send(f"`{infix} = {value}`")

    async def _handle_shutdown(self, ctx, args=None):
        """Handle the shutdown command"""
        if ctx.author.id != self.owner_id:
            await ctx.send("Only the bot owner can use this command.")
            return

        await ctx.send("Shutting down...")
        await self.close()

    async def on_message(self, message: discord.Message):
        """Called when a message is received"""
        # Ignore messages from the bot itself
        if message.author == self.user:
            return

        # Deduplication check - must be BEFORE process_commands to prevent double command execution
        if message.id in self.processed_messages:
            return
        self.processed_messages.append(message.id)

        await self.process_commands(message)
