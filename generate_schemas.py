import json
import mzinspect.project.config as config

configFile = config.ConfigFile()

configSchema = configFile.model_json_schema(by_alias=False)
configSchema["$schema"] = "http://json-schema.org/draft-07/schema#"

with open("config-schema.json", "wt", encoding="utf-8") as schema:
    schema.write(json.dumps(configSchema, indent=2))
