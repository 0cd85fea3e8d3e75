"""Well-known term keys of the type taxonomy.

The compiler recognizes sub-kinds (URL, e-mail, integer, set, references...)
by the `_key` of the hierarchy node that introduces them.
"""

# Universal root of the type taxonomy, excluded from resolved hierarchies
TYPE_ROOT = ":type"

# Base type terms, one per base category
TYPE_ANY = ":type:data:any"
TYPE_BOOLEAN = ":type:data:bool"
TYPE_TEXT = ":type:data:text"
TYPE_NUMERIC = ":type:data:numeric"
TYPE_LIST = ":type:data:list"
TYPE_STRUCT = ":type:data:struct"
TYPE_OBJECT = ":type:data:object"

# Text sub-kinds
TYPE_STRING = ":type:value:str"
TYPE_KEY = ":type:value:key"
TYPE_URL = ":type:value:url"
TYPE_HEX = ":type:value:hex"
TYPE_EMAIL = ":type:value:email"

# Reference sub-kinds (textual)
TYPE_REFERENCE = ":type:value:ref"
TYPE_REFERENCE_ID = ":type:value:ref:id"
TYPE_REFERENCE_KEY = ":type:value:ref:key"
TYPE_REFERENCE_GID = ":type:value:ref:gid"
TYPE_ENUM = ":type:value:enum"

# Numeric sub-kinds
TYPE_INTEGER = ":type:value:int"
TYPE_TIMESTAMP = ":type:value:stamp"

# List sub-kinds
TYPE_SET = ":type:value:set"

REFERENCE_KEYS: frozenset[str] = frozenset({
    TYPE_REFERENCE,
    TYPE_REFERENCE_ID,
    TYPE_REFERENCE_KEY,
    TYPE_REFERENCE_GID,
    TYPE_ENUM,
})

# Descriptor formats
FORMAT_SCALAR = "scalar"
FORMAT_LIST = "list"
FORMAT_SET = "set"

# Format -> container type appended after the scalar hierarchy
FORMAT_CONTAINERS: dict[str, str] = {
    FORMAT_LIST: TYPE_LIST,
    FORMAT_SET: TYPE_SET,
}

# Prefix of hook terms (":rule:castNumber" -> "castNumber")
RULE_PREFIX = ":rule:"
