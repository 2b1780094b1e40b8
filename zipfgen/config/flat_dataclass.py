from argparse import (
    ArgumentDefaultsHelpFormatter,
    ArgumentParser,
    BooleanOptionalAction,
)
from collections import defaultdict, deque
from dataclasses import MISSING, fields, make_dataclass
from typing import Any, List, Optional

from zipfgen.config.base_poly_config import BasePolyConfig
from zipfgen.config.utils import (
    get_all_subclasses,
    get_inner_type,
    is_bool,
    is_optional,
    is_primitive_type,
    is_subclass,
    to_snake_case,
)


def topological_sort(dataclass_dependencies: dict) -> list:
    in_degree = defaultdict(int)
    for cls, dependencies in dataclass_dependencies.items():
        for dep in dependencies:
            in_degree[dep] += 1

    zero_in_degree_classes = deque(
        [cls for cls in dataclass_dependencies if in_degree[cls] == 0]
    )
    sorted_classes = []

    while zero_in_degree_classes:
        cls = zero_in_degree_classes.popleft()
        sorted_classes.append(cls)
        for dep in dataclass_dependencies[cls]:
            in_degree[dep] -= 1
            if in_degree[dep] == 0:
                zero_in_degree_classes.append(dep)

    return sorted_classes


def reconstruct_original_dataclass(self) -> Any:
    """
    Rebuilds the nested config tree from the flat instance, leaves first.
    Only the selected subclass of each poly config field is instantiated.
    """
    sorted_classes = topological_sort(self.dataclass_dependencies)
    instances = {}

    for _cls in reversed(sorted_classes):
        args = {}

        for prefixed_field_name, original_field_name, field_type in self.dataclass_args[
            _cls
        ]:
            if is_subclass(field_type, BasePolyConfig):
                config_type = getattr(self, f"{original_field_name}_type")
                for subclass in get_all_subclasses(field_type):
                    if str(subclass.get_type()) == config_type:
                        args[original_field_name] = build_instance(
                            self, subclass, instances
                        )
                        break
                else:
                    raise ValueError(
                        f"Invalid {original_field_name}_type: {config_type}"
                    )
            elif hasattr(field_type, "__dataclass_fields__"):
                args[original_field_name] = build_instance(
                    self, field_type, instances
                )
            else:
                value = getattr(self, prefixed_field_name)
                if callable(value):
                    # default factory values
                    value = value()
                args[original_field_name] = value

        if _cls is sorted_classes[0]:
            return _cls(**args)

        # poly subclasses are built lazily so that unselected ones never run
        # their __post_init__ validation
        instances[_cls] = args


def build_instance(self, _cls: Any, instances: dict) -> Any:
    return _cls(**instances[_cls])


@classmethod
def create_from_cli_args(cls, argv: Optional[List[str]] = None) -> Any:
    """
    Parses argv (sys.argv when None) into a FlatClass instance.
    """
    parser = ArgumentParser(formatter_class=ArgumentDefaultsHelpFormatter)

    for field in fields(cls):
        help_text = cls.metadata_mapping[field.name].get("help", None)

        if is_bool(field.type):
            arg_params = {"action": BooleanOptionalAction, "help": help_text}
        else:
            assert is_primitive_type(field.type), field.type
            arg_params = {"type": field.type, "help": help_text}

        if field.default is not MISSING:
            value = field.default
            if callable(value):
                value = value()
            arg_params["default"] = value
        elif field.default_factory is not MISSING:
            arg_params["default"] = field.default_factory()
        else:
            arg_params["required"] = True

        parser.add_argument(f"--{field.name}", **arg_params)

    args = parser.parse_args(argv)

    return cls(**vars(args))


def create_flat_dataclass(input_dataclass: Any) -> Any:
    """
    Creates a new FlatClass type by recursively flattening the input dataclass.
    Nested dataclass fields are prefixed with the snake-cased class name, and
    every poly config field gains a `<field>_type` selector.
    """
    meta_fields_with_defaults = []
    meta_fields_without_defaults = []
    processed_classes = set()
    dataclass_args = defaultdict(list)
    dataclass_dependencies = defaultdict(set)
    metadata_mapping = {}

    def process_dataclass(_input_dataclass, prefix=""):
        if _input_dataclass in processed_classes:
            return

        processed_classes.add(_input_dataclass)
        # make sure leaf classes are part of the dependency graph
        dataclass_dependencies[_input_dataclass]

        for field in fields(_input_dataclass):
            prefixed_name = f"{prefix}{field.name}"

            if is_optional(field.type):
                field_type = get_inner_type(field.type)
            else:
                field_type = field.type

            if is_subclass(field_type, BasePolyConfig):
                dataclass_args[_input_dataclass].append(
                    (field.name, field.name, field_type)
                )

                type_field_name = f"{field.name}_type"
                default_value = str(field.default_factory.get_type())
                meta_fields_with_defaults.append(
                    (type_field_name, type(default_value), default_value)
                )
                metadata_mapping[type_field_name] = field.metadata

                assert hasattr(field_type, "__dataclass_fields__")
                for subclass in get_all_subclasses(field_type):
                    dataclass_dependencies[_input_dataclass].add(subclass)
                    process_dataclass(subclass, f"{to_snake_case(subclass.__name__)}_")
                continue

            if hasattr(field_type, "__dataclass_fields__"):
                dataclass_dependencies[_input_dataclass].add(field_type)
                dataclass_args[_input_dataclass].append(
                    (field.name, field.name, field_type)
                )
                process_dataclass(field_type, f"{to_snake_case(field_type.__name__)}_")
                continue

            if field.default is not MISSING:
                meta_fields_with_defaults.append(
                    (prefixed_name, field_type, field.default)
                )
            elif field.default_factory is not MISSING:
                meta_fields_with_defaults.append(
                    (prefixed_name, field_type, field.default_factory)
                )
            else:
                meta_fields_without_defaults.append((prefixed_name, field_type))

            dataclass_args[_input_dataclass].append(
                (prefixed_name, field.name, field_type)
            )
            metadata_mapping[prefixed_name] = field.metadata

    process_dataclass(input_dataclass)

    meta_fields = meta_fields_without_defaults + meta_fields_with_defaults
    FlatClass = make_dataclass("FlatClass", meta_fields)

    FlatClass.dataclass_args = dataclass_args
    FlatClass.dataclass_dependencies = dataclass_dependencies
    FlatClass.metadata_mapping = metadata_mapping

    FlatClass.reconstruct_original_dataclass = reconstruct_original_dataclass
    FlatClass.create_from_cli_args = create_from_cli_args

    return FlatClass
