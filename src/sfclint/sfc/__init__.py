"""tree-sitter based normalization of component definition files.

Provides:
- core: parse_source and node helpers
- blocks: split_file (full file vs. bare logic-block fragment)
- classify: top-level statement classification
- contracts: defineProps/defineEmits normalization
- rename: scoped member-access and type reference renames
- rewriter: rewrite/rewrite_text, the canonical region serializer
- reporter: whitespace-insensitive comparison and the single diagnostic
"""
