from whisker import *


cli = parse(
    description="Custom description",
    help="""
        Usage
          foo <input>
    """,
    flags={
        "unicorn": {"alias": "u"},
        "meow": {"default": "dog"},
        "camelCaseOption": {"default": "foo"},
    },
)


if __name__ == '__main__':
    if cli.flags["camelCaseOption"] == "foo":
        for key in cli.flags:
            print(key)
    else:
        print(cli.flags["camelCaseOption"])
