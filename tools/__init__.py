"""Command-line tools: presets and the headless runner."""
