from typing import Any, Dict, List, Union

from .parser import BlockKind, BlockNode, Program, Script, Value, NumberValue, TextValue, T_Argument

block_kind_name_to_kind = {
    kind.value: kind
    for kind in BlockKind
}


def dump_value(value: Value):
    if isinstance(value, NumberValue):
        return ['number', value.value]
    return ['text', value.value]


def load_value(dumped_value: List[Any]) -> Value:
    if dumped_value[0] == 'number':
        return NumberValue(dumped_value[1])
    return TextValue(dumped_value[1])


def dump_argument(arg: T_Argument):
    if isinstance(arg, BlockNode):
        return {'expression': list(map(dump_argument, arg.args))}
    return arg


def load_argument(dumped_arg: Union[float, str, Dict[str, list]]) -> T_Argument:
    if isinstance(dumped_arg, dict):
        return BlockNode(BlockKind.OPERATORS, 'expression', list(map(load_argument, dumped_arg['expression'])))
    if isinstance(dumped_arg, int):
        return float(dumped_arg)
    return dumped_arg


def dump_block(block: BlockNode):
    return {
        'kind': block.kind.value,
        'name': block.name,
        'args': list(map(dump_argument, block.args)),
        'body': block.body,
        'next': block.next,
    }


def load_block(dumped_block: Dict[str, Any]) -> BlockNode:
    return BlockNode(
        kind=block_kind_name_to_kind.get(dumped_block['kind'], BlockKind.CUSTOM),
        name=dumped_block['name'],
        args=list(map(load_argument, dumped_block.get('args', []))),
        body=dumped_block.get('body'),
        next=dumped_block.get('next'),
    )


def dump_program(program: Program):
    return {
        'blocks': list(map(dump_block, program.blocks)),
        'scripts': [script.root for script in program.scripts],
        'variables': {
            name: dump_value(value)
            for name, value in program.variables.items()
        },
        'lists': {
            name: list(map(dump_value, values))
            for name, values in program.lists.items()
        },
    }


def load_program(dumped_program: Dict[str, Any]) -> Program:
    program = Program()
    program.blocks = list(map(load_block, dumped_program.get('blocks', [])))
    program.scripts = [Script(root) for root in dumped_program.get('scripts', [])]
    for name, value in dumped_program.get('variables', {}).items():
        program.variables[name] = load_value(value)
    for name, values in dumped_program.get('lists', {}).items():
        program.lists[name] = list(map(load_value, values))
    return program
