from zipfgen.config import DataGeneratorConfig
from zipfgen.data_generator import DataGenerator
from zipfgen.logger import set_log_level
from zipfgen.utils.random import set_seeds


def main() -> None:
    config: DataGeneratorConfig = DataGeneratorConfig.create_from_cli_args()

    set_log_level(config.log_level)
    set_seeds(config.seed)

    data_generator = DataGenerator(config)
    data_generator.run()


if __name__ == "__main__":
    main()
