"""
Database layer: declarative base, store lifecycle and the session dependency.

Import from the submodules directly (`blogapp.database.lifecycle`, ...); this
package module stays empty so models can import `database.base` without
pulling the lifecycle (which imports the models) in.
"""
