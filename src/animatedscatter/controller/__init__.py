"""
The CONTROLLER layer drives the state: the animation timer, the keyboard
shortcut and the reconciliation algorithm used by the renderer.
"""
