from .surfaces import LinkOpener, PromptSurface, RenderingSurface

__all__ = ['LinkOpener', 'PromptSurface', 'RenderingSurface']
