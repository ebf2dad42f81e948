"""todo_highlight: annotation keyword highlighting for Qt text editors.

Compiles TODO/FIXME style keyword rules into matchers, scans buffer text for
them and hands per-class ranges and styles to a renderer.
"""
__all__ = [
    'annotations', 'cli', 'config', 'controller', 'cooldown', 'decorations', 'errors', 'main_window',
    'matching', 'patterns', 'report', 'scheduler', 'session', 'settings',
    'styles', 'subscriptions'
]
__version__ = '0.1.0'
