# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


TYPES = """
WITH
    MODULE schema,

    material_scalars := (
        SELECT ScalarType
        FILTER
            (.name LIKE 'std::%' OR .name LIKE 'cal::%')
            AND NOT .is_abstract
    )

SELECT Type {
    id,
    name,
    is_abstract,

    kind := 'object' IF Type IS ObjectType ELSE
            'scalar' IF Type IS ScalarType ELSE
            'array' IF Type IS Array ELSE
            'tuple' IF Type IS Tuple ELSE
            'unknown',

    [IS ScalarType].enum_values,

    single material_id := (
        SELECT x := Type[IS ScalarType].ancestors
        FILTER x IN material_scalars
        LIMIT 1
    ).id,

    [IS InheritingObject].bases: {
        id
    } ORDER BY @index ASC,

    [IS InheritingObject].ancestors: {
        id
    } ORDER BY @index ASC,

    [IS ObjectType].union_of: {
        id
    },
    [IS ObjectType].intersection_of: {
        id
    },
    [IS ObjectType].pointers: {
        cardinality,
        required,
        name,
        expr,

        target_id := .target.id,

        kind := 'link' IF .__type__.name = 'schema::Link' ELSE 'property',

        [IS Link].pointers: {
            cardinality,
            required,
            name,
            expr,
            target_id := .target.id,
            kind := 'link' IF .__type__.name = 'schema::Link' ELSE 'property',
        } FILTER @is_owned,
    } FILTER @is_owned,

    array_element_id := [IS Array].element_type.id,

    tuple_elements := (SELECT [IS Tuple].element_types {
        target_id := .type.id,
        name
    } ORDER BY @index ASC),
}
ORDER BY .name;
"""
