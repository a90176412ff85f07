from __future__ import annotations

from agentic.cli import base_parser, parse_param
from agentic.core.config.loader import load_app_config
from agentic.core.providers.openai_chat import OpenAIChatCompletionsProvider
from agentic.core.runtime.errors import ConfigError
from agentic.core.runtime.helpers import generate_text_or_abort
from agentic.core.telemetry.logging import configure_logging

DEFAULT_PROMPT = "Hello! How are you?"
DEFAULT_PARAMS = {"temperature": 0.7, "top_p": 0.9}


def main(argv: list[str] | None = None) -> int:
    parser = base_parser("agentic-demo", "Generate text through the OpenAI chat-completions provider")
    parser.add_argument("--config", default=None, help="Config file path")
    parser.add_argument("--model", default=None, help="Model name (defaults to the first catalog entry)")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT)
    parser.add_argument("--param", action="append", type=parse_param, default=[], metavar="KEY=VALUE")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request deadline in seconds")
    parser.add_argument("--list-models", action="store_true")
    args = parser.parse_args(argv)

    try:
        cfg = load_app_config(args.config)
        configure_logging(cfg.telemetry.log_level, cfg.telemetry.json_logs)
        provider = OpenAIChatCompletionsProvider.from_config(cfg)
    except ConfigError as exc:
        print(f"config-invalid error={exc}")
        return 1

    with provider:
        print(f"Provider: {provider.name}")
        print("Available Models:")
        for model in provider.available_models():
            accepted = ", ".join(model.parameters) or "none"
            print(f"  - {model.name} (parameters: {accepted})")
        if args.list_models:
            return 0

        model_name = args.model or provider.available_models()[0].name
        if args.param:
            params = dict(args.param)
        else:
            accepted = set(provider.available_request_parameters(model_name))
            params = {k: v for k, v in DEFAULT_PARAMS.items() if k in accepted}

        print()
        print(f"Generating text with {model_name} ...")
        result = generate_text_or_abort(provider, args.prompt, model_name, params, timeout=args.timeout)

    print()
    print("Generated text:")
    print(result.text)
    print()
    print("Token usage:")
    print(f"  Prompt tokens: {result.usage.prompt_tokens}")
    print(f"  Completion tokens: {result.usage.completion_tokens}")
    print(f"  Total tokens: {result.usage.total_tokens}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
