"""Qt widgets of the rendering surface. Draw from the store, forward input to it."""
