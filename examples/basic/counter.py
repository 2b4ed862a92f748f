"""Compile once, update many times: only changed bindings touch the tree."""

from tessera import compile_markup
from tessera.profiling import profiled_render

template = compile_markup('<p class="{tone}" ?hidden="{hidden}">{label(count)}</p>')
instance = template.create_instance({
    "tone": "calm",
    "hidden": False,
    "label": lambda n: f"{n} clicks",
    "count": 0,
})
print(instance.render())

with profiled_render() as metrics:
    for count in range(1, 4):
        instance.update(count=count)
    instance.update(tone="calm")

print(instance.render())
print(metrics.summary())
