"""Pure identifier logic: codecs, tag extraction and the resolution cascade."""
