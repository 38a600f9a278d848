"""Transport layer: turning captured MIDI input into framed SysEx data."""
