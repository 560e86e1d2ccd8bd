"""auth/ -- Identity, credentials, bearer tokens and the favorites relation.

Layer rule: auth/ imports only stdlib, third-party libraries, core/ and
fleet/ (for the cars table). It does NOT import from api/.
api/ imports from auth/, not the other way around.
"""
