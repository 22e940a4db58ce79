"""Interactive command-line chat with a model."""

from __future__ import annotations

import sys
import time

from embee.engine import Engine, GenerationConfig
from embee.model import Model

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"

SYSTEM_PROMPT = "You are an AI assistant. You are helpful, harmless, and honest.\n\n"


def _chat(model_path: str, temperature: float, top_p: float) -> None:
    print(f"{BOLD}{CYAN}Loading model from: {model_path}{RESET}")
    model = Model(model_path)

    cfg = model.config
    print(
        f"Model: {cfg.model_name} ({cfg.n_layers} layers, "
        f"{cfg.n_heads} heads, {cfg.n_embd} embedding size)"
    )

    engine = Engine(model)
    gen_config = GenerationConfig(temperature=temperature, top_p=top_p, max_length=1024)
    conversation = SYSTEM_PROMPT

    print(f"{BOLD}{GREEN}Chat with the model. Type 'exit' to quit.{RESET}")

    while True:
        sys.stdout.write(f"{BOLD}{BLUE}\nUser: {RESET}")
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            break
        user_input = line.rstrip("\n")
        if user_input == "exit":
            break

        conversation += f"User: {user_input}\n\nAssistant: "
        sys.stdout.write(f"{BOLD}{YELLOW}Assistant: {RESET}")
        sys.stdout.flush()

        start = time.perf_counter()
        prompt = conversation
        for _, text in engine.stream(prompt, gen_config):
            sys.stdout.write(text)
            sys.stdout.flush()
            conversation += text
        elapsed = time.perf_counter() - start

        conversation += "\n\n"
        print()
        print(f"{MAGENTA}[Generated in {elapsed} seconds]{RESET}")


def main(argv: list[str] | None = None) -> int:
    """Run the chat loop; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: chat_cli <model_path> [temperature] [top_p]", file=sys.stderr)
        return 1

    try:
        temperature = float(args[1]) if len(args) > 1 else 0.7
        top_p = float(args[2]) if len(args) > 2 else 0.9
    except ValueError as exc:
        print(f"{RED}Error: {exc}{RESET}", file=sys.stderr)
        return 1

    try:
        _chat(args[0], temperature, top_p)
    except Exception as exc:  # report any failure as the command's error
        print(f"{RED}Error: {exc}{RESET}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())