"""Runtime services shared by the buffer and its hosts."""
