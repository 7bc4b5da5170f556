"""
BookFriends test suite

- unit/: storage components and read-side views
- integration/: journal workflows over a file-backed store
"""
