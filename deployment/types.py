import click

from deployment.utils import InvalidAddress, validate_address


class MinInt(click.ParamType):
    name = "minint"

    def __init__(self, min_value):
        self.min_value = min_value

    def convert(self, value, param, ctx):
        try:
            ivalue = int(value)
        except ValueError:
            self.fail(f"{value} is not a valid integer", param, ctx)
        if ivalue < self.min_value:
            self.fail(
                f"{value} is less than the minimum allowed value of {self.min_value}", param, ctx
            )
        return ivalue


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def __init__(self, allow_empty: bool = False):
        self.allow_empty = allow_empty

    def convert(self, value, param, ctx):
        if self.allow_empty and value == "":
            return None
        name = param.name if param is not None else "ethereum"
        try:
            value = validate_address(name=name, value=value)
        except InvalidAddress as e:
            self.fail(str(e), param, ctx)
        else:
            return value
