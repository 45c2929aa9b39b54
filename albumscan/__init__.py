"""albumscan core package.

Modules:
- user_scan: breadth-first album discovery for one user
- containment: "does this directory hold photos" walk, memoized
- scanner_cache: process-wide memo shared by all scans
- reconcile: removal of albums that vanished from disk
- media: image detection
- database / models / repository: SQLite storage via SQLModel
- config: INI parsing and config object
"""
