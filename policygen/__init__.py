"""Policy generator: wizard, template assembly, rich-text edit surface and exporters."""
