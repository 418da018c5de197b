"""
Family tree web application: members, relationships, tree building and kinship resolution
"""
