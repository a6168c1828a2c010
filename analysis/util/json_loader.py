#Load json files

from analysis.util.validators import AIEConfigMetadata , StaticInfo

class JsonLoader:
    """
    Load Json Files
    """
    @staticmethod
    def load_config_metadata(path:str) -> AIEConfigMetadata:
        """
        Load AIE configuration metadata
        """
        with open(path, encoding="utf-8") as f:
            return AIEConfigMetadata.model_validate_json(f.read())

    @staticmethod
    def load_static_info(path:str) -> StaticInfo:
        """
        Load configured counters
        """
        with open(path, encoding="utf-8") as f:
            return StaticInfo.model_validate_json(f.read())
