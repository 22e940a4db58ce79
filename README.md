# embee

A compact transformer inference engine. It works out a model file's format
from the file's extension or its leading bytes. It tokenizes prompts and
generates text token by token. Generation uses temperature scaling, a
repetition penalty and top-p (nucleus) sampling.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Command line

Start an interactive chat session with a model file:

```
embee-chat path/to/model.amb [temperature] [top_p]
```

The temperature defaults to 0.7 and top-p to 0.9. Each reply is limited to
1024 tokens. Type `exit` or send end-of-input to leave the session. After each
reply the command prints how long generation took. If loading or generation
fails, the command prints the error and exits with status 1.

## Library use

```python
from embee.model import Model
from embee.engine import Engine, GenerationConfig

model = Model("model.amb")
print(model.config.model_name, model.config.n_layers)

engine = Engine(model)  # optionally Engine(model, numpy.random.default_rng(seed))
config = GenerationConfig(max_length=64, temperature=0.7, top_p=0.9)

# Whole completion (prompt followed by generated text)
text = engine.generate("Hello", config)

# Streaming through a callback; a falsy return value stops generation
def on_token(token_id, piece):
    print(piece, end="", flush=True)
    return True

engine.generate_with_callback("Hello", on_token, config)

# Streaming as a generator of (token_id, text) pairs
for token_id, piece in engine.stream("Hello", config):
    ...

# Logits over the vocabulary for the next position
logits = engine.get_logits("Hello")
```

`GenerationConfig` defaults to `max_length=512`, `temperature=0.8`,
`top_p=0.9`, `repetition_penalty=1.1`, `batch_size=1` and `use_cache=True`.

Generation stops at the tokenizer's end-of-sequence token, once `max_length`
tokens have been produced, or when the callback returns a falsy value.

The sampling helpers can also be used on their own:

```python
import numpy as np
from embee.engine import apply_repetition_penalty, sample_token

logits = np.array([2.0, -1.0, 0.5], dtype=np.float32)
penalised = apply_repetition_penalty(logits, [0, 1], 1.1)  # returns a copy
token = sample_token(penalised, 0.9, np.random.default_rng(0))
```

`apply_repetition_penalty` divides positive logits of seen tokens by the
penalty and multiplies the others by it. It ignores tokens outside the
vocabulary. A `top_p` below 1e-6 gives greedy decoding.

`embee.model.detect_format` returns `"amb"`, `"gguf"` or `"onnx"`. If the
extension does not settle the format, it reads the file header, and it falls
back to `"amb"`. Tensors are available by name through `Model.get_tensor` and
`Model.has_tensor`. Asking for an unknown name raises `KeyError`.

`embee.tokenizer.Tokenizer` is the abstract tokenizer interface.
`CharTokenizer` maps each UTF-8 byte to one token. It has a vocabulary of 256,
with BOS 1, EOS 2 and PAD 0.

## What it does not do

- An `amb` file's contents are not read. Loading one gives a fixed
  configuration ("phi-3-mini-4bit-dummy", 24 layers, 16 heads, 2048 embedding
  size, 32000 vocabulary), zero-filled weight tensors and a `CharTokenizer`.
- GGUF and ONNX files are recognised but not loaded. Opening one raises
  `embee.model.UnsupportedFormatError`.
- There is no real forward pass. The engine draws its logits from a standard
  normal distribution, so the generated text is random.