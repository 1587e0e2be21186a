"""The two drivers of `CounterState`: Markdown text and Marko document trees."""
