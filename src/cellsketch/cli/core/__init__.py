"""Terminal primitives: raw-mode control, input parsing, shortcuts."""
