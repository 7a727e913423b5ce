from ExampleSceneDef import OrthoFriendlyExample
from cli import render

example = OrthoFriendlyExample()

render(example.tracer, "ortho_friendly.png")
