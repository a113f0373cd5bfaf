"""Services behind the page pipeline: site files, page metadata, plugin scripts and assembly."""
