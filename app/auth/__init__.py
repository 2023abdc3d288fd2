"""
Authentication and authorization module.

``app.auth.guard`` resolves bearer tokens to users; ``app.auth.permissions``
holds the ownership rule. Import from the submodules directly.
"""
